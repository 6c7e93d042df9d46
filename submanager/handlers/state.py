"""
Per-user conversation state shared by the handler routers.
"""
from typing import Any, Dict, Optional, Tuple

from aiogram import F
from aiogram.types import Message

from ..config.settings import ADMINS
from ..keyboards.main_keyboards import MENU_BUTTONS

current_action: Dict[int, Tuple[str, Dict[str, Any]]] = {}

# Free-text input for a conversation step; menu buttons and commands excluded.
TEXT_INPUT = F.text & ~F.text.startswith("/") & ~F.text.in_(MENU_BUTTONS)


def is_admin(user_id: int) -> bool:
    """Only configured admins may use the bot"""
    return user_id in ADMINS


def get_step(user_id: int) -> Optional[str]:
    return current_action.get(user_id, (None, None))[0]


def get_data(user_id: int) -> Dict[str, Any]:
    return current_action.get(user_id, (None, {}))[1]


def set_step(user_id: int, step: str, data: Optional[Dict[str, Any]] = None) -> None:
    current_action[user_id] = (step, data if data is not None else {})


def clear_step(user_id: int) -> None:
    current_action.pop(user_id, None)


def at_step(step: str):
    """Message filter: admin is at the given conversation step"""
    def check(message: Message) -> bool:
        return is_admin(message.from_user.id) and get_step(message.from_user.id) == step
    return check
