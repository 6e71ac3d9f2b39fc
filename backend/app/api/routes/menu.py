"""Menu routes: POS grid, menu/inventory views and item CRUD."""

from typing import List, Optional

from fastapi import APIRouter, Query, Response

from app.core.rbac import CurrentStaff, RequireManager
from app.schemas.menu import MenuItem, MenuItemCreate, MenuItemUpdate
from app.services.app_state import AppStateDep
from app.services.menu_service import MenuService, MenuView, PosCategoryFilter

router = APIRouter()


@router.get("/items", response_model=List[MenuItem])
def list_items(current_staff: CurrentStaff, state: AppStateDep):
    return state.menu


@router.get("/pos", response_model=List[MenuItem])
def pos_menu(
    current_staff: CurrentStaff,
    state: AppStateDep,
    category: PosCategoryFilter = PosCategoryFilter.ALL,
    search: Optional[str] = Query(None, max_length=100),
):
    """Sellable items for the order-entry grid."""
    return MenuService(state).pos_menu(category, search)


@router.get("/views/{view}", response_model=List[MenuItem])
def menu_view(view: MenuView, current_staff: CurrentStaff, state: AppStateDep):
    return MenuService(state).menu_view(view)


@router.get("/items/{item_id}", response_model=MenuItem)
def get_item(item_id: str, current_staff: CurrentStaff, state: AppStateDep):
    return state.get_menu_item(item_id)


@router.post("/items", response_model=MenuItem, status_code=201)
def create_item(data: MenuItemCreate, current_staff: RequireManager, state: AppStateDep):
    return MenuService(state).create_item(data)


@router.put("/items/{item_id}", response_model=MenuItem)
def update_item(item_id: str, data: MenuItemUpdate, current_staff: RequireManager, state: AppStateDep):
    return MenuService(state).update_item(item_id, data)


@router.delete("/items/{item_id}", status_code=204)
def delete_item(item_id: str, current_staff: RequireManager, state: AppStateDep):
    MenuService(state).delete_item(item_id)
    return Response(status_code=204)
