from .main_keyboards import get_main_kb, MENU_BUTTONS
from .inline_keyboards import (
    get_accounts_kb,
    get_account_kb,
    get_slot_kb,
    get_client_picker_kb,
    get_clients_kb,
    get_client_kb,
    get_confirm_kb,
    get_services_kb,
    get_settings_kb,
    get_cancel_kb,
    get_refresh_dashboard_kb
)

__all__ = [
    "get_main_kb",
    "MENU_BUTTONS",
    "get_accounts_kb",
    "get_account_kb",
    "get_slot_kb",
    "get_client_picker_kb",
    "get_clients_kb",
    "get_client_kb",
    "get_confirm_kb",
    "get_services_kb",
    "get_settings_kb",
    "get_cancel_kb",
    "get_refresh_dashboard_kb"
]
