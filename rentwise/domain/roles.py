# rentwise/domain/roles.py
from __future__ import annotations

from dataclasses import dataclass

from .types import UserRole


@dataclass(frozen=True)
class QuickAction:
    name: str
    description: str
    href: str


@dataclass(frozen=True)
class RoleView:
    display_name: str
    welcome: str
    quick_actions: tuple[QuickAction, ...]


_BROWSE = QuickAction("Browse Properties", "Explore all available properties", "/properties")


ROLE_VIEWS: dict[UserRole, RoleView] = {
    UserRole.buyer: RoleView(
        display_name="Property Buyer",
        welcome="Find your dream property today!",
        quick_actions=(
            _BROWSE,
            QuickAction("My Wishlist", "View saved properties", "/buyer?tab=wishlist"),
            QuickAction("My Messages", "Chat with sellers", "/buyer?tab=messages"),
        ),
    ),
    UserRole.seller: RoleView(
        display_name="Property Seller",
        welcome="Manage your property listings and grow your business!",
        quick_actions=(
            _BROWSE,
            QuickAction("My Properties", "Manage your listings", "/seller?tab=properties"),
            QuickAction("My Inbox", "View buyer inquiries", "/seller?tab=inbox"),
            QuickAction("Analytics", "Track performance", "/seller?tab=analytics"),
        ),
    ),
    UserRole.agent: RoleView(
        display_name="Real Estate Agent",
        welcome="Connect buyers and sellers in your market!",
        quick_actions=(
            _BROWSE,
            QuickAction("My Clients", "Manage client relationships", "/agent"),
            QuickAction("Create Listing", "Add new property", "/properties/create"),
        ),
    ),
    UserRole.renter: RoleView(
        display_name="Property Renter",
        welcome="Discover the perfect rental property!",
        quick_actions=(
            _BROWSE,
            QuickAction("My Applications", "Track rental applications", "/renter"),
            QuickAction("Saved Rentals", "View saved properties", "/renter?tab=saved"),
        ),
    ),
    UserRole.admin: RoleView(
        display_name="Administrator",
        welcome="Manage the platform and oversee operations!",
        quick_actions=(
            _BROWSE,
            QuickAction("Admin Panel", "Manage platform settings", "/admin"),
            QuickAction("User Management", "Manage users and roles", "/admin?tab=users"),
        ),
    ),
}

# Adding a UserRole without a view must fail at import, not at render time.
_missing = set(UserRole) - set(ROLE_VIEWS)
if _missing:
    raise RuntimeError(f"ROLE_VIEWS missing roles: {sorted(r.value for r in _missing)}")


def parse_role(raw: UserRole | str) -> UserRole:
    if isinstance(raw, UserRole):
        return raw
    s = (raw or "").strip().lower()
    try:
        return UserRole(s)
    except ValueError:
        raise ValueError(f"Unknown user role: {raw!r}") from None


def role_view(role: UserRole | str) -> RoleView:
    return ROLE_VIEWS[parse_role(role)]
