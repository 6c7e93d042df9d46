"""
Main keyboard layouts for bot.
"""
from aiogram.types import (
    ReplyKeyboardMarkup,
    KeyboardButton
)

BTN_DASHBOARD = "📊 Dashboard"
BTN_ALERTS = "🚨 Alerts"
BTN_ACCOUNTS = "🏢 Accounts"
BTN_CLIENTS = "👥 Clients"
BTN_ADD_ACCOUNT = "➕ Add Account"
BTN_SMART_IMPORT = "✨ Smart Import"
BTN_NOTIFY = "🔔 Notify Telegram"
BTN_SETTINGS = "⚙️ Settings"

MENU_BUTTONS = {
    BTN_DASHBOARD,
    BTN_ALERTS,
    BTN_ACCOUNTS,
    BTN_CLIENTS,
    BTN_ADD_ACCOUNT,
    BTN_SMART_IMPORT,
    BTN_NOTIFY,
    BTN_SETTINGS
}


def get_main_kb() -> ReplyKeyboardMarkup:
    """
    Get main keyboard.
        
    Returns:
        ReplyKeyboardMarkup with the menu buttons
    """
    keyboard = [
        [KeyboardButton(text=BTN_DASHBOARD), KeyboardButton(text=BTN_ALERTS)],
        [KeyboardButton(text=BTN_ACCOUNTS), KeyboardButton(text=BTN_CLIENTS)],
        [KeyboardButton(text=BTN_ADD_ACCOUNT), KeyboardButton(text=BTN_SMART_IMPORT)],
        [KeyboardButton(text=BTN_NOTIFY), KeyboardButton(text=BTN_SETTINGS)]
    ]
    
    return ReplyKeyboardMarkup(
        keyboard=keyboard,
        resize_keyboard=True,
        input_field_placeholder="Choose an option ..."
    )
