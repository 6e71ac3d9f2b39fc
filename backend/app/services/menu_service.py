"""Menu views for the POS grid and the menu/inventory pages."""

import logging
import uuid
from enum import Enum
from typing import List, Optional

from app.models.enums import DRINK_CATEGORIES, ItemCategory
from app.schemas.menu import MenuItem, MenuItemCreate, MenuItemUpdate
from app.services.app_state import AppState

logger = logging.getLogger(__name__)


class PosCategoryFilter(str, Enum):
    ALL = "ALL"
    FOOD = "FOOD"
    DESSERT = "DESSERT"
    DRINK = "DRINK"


class MenuView(str, Enum):
    FOOD = "food"
    BAR = "bar"
    INVENTORY = "inventory"


VIEW_CATEGORIES = {
    MenuView.FOOD: frozenset({ItemCategory.FOOD, ItemCategory.DESSERT}),
    MenuView.BAR: DRINK_CATEGORIES,
    MenuView.INVENTORY: DRINK_CATEGORIES | {ItemCategory.COOKING_ESSENTIAL},
}


class MenuService:
    def __init__(self, state: AppState):
        self.state = state

    def pos_menu(
        self,
        category: PosCategoryFilter = PosCategoryFilter.ALL,
        search: Optional[str] = None,
    ) -> List[MenuItem]:
        """Sellable items (never cooking essentials), by filter and name search."""
        term = (search or "").strip().lower()
        items = []
        for item in self.state.menu:
            if item.category == ItemCategory.COOKING_ESSENTIAL:
                continue
            if category == PosCategoryFilter.DRINK:
                if item.category not in DRINK_CATEGORIES:
                    continue
            elif category != PosCategoryFilter.ALL and item.category.value != category.value:
                continue
            if term and term not in item.name.lower():
                continue
            items.append(item)
        return items

    def menu_view(self, view: MenuView) -> List[MenuItem]:
        categories = VIEW_CATEGORIES[MenuView(view)]
        return [item for item in self.state.menu if item.category in categories]

    def create_item(self, data: MenuItemCreate) -> MenuItem:
        item = MenuItem(id=str(uuid.uuid4()), **data.model_dump())
        self.state.add_menu_item(item)
        logger.info(f"Menu item {item.id} ({item.name}) created")
        return item

    def update_item(self, item_id: str, data: MenuItemUpdate) -> MenuItem:
        return self.state.update_menu_item(item_id, data.model_dump(exclude_unset=True))

    def delete_item(self, item_id: str) -> MenuItem:
        item = self.state.delete_menu_item(item_id)
        logger.info(f"Menu item {item_id} deleted")
        return item
