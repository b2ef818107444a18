"""
Named views of the web client.

The router collaborator is any callable accepting one of these paths
(`on_navigate(ROUTES_PATH["Bills"])`).
"""
from typing import Any, Callable

ROUTES_PATH = {
    "Login": "/",
    "Bills": "#employee/bills",
    "NewBill": "#employee/bill/new",
    "Dashboard": "#admin/dashboard",
}

Navigate = Callable[[str], Any]
