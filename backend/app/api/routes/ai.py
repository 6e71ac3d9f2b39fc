"""Text-completion assistant routes."""

from fastapi import APIRouter, Depends
from pydantic import Field

from app.core.rbac import RequireManager
from app.models.enums import StaffStatus
from app.schemas.common import CamelModel
from app.services import reporting_service
from app.services.app_state import AppStateDep
from app.services.text_completion_service import (
    TextCompletionClient,
    generate_menu_description,
    get_manager_insights,
)

router = APIRouter()


class MenuDescriptionRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    ingredients: str = Field("", max_length=1000)


class TextResponse(CamelModel):
    text: str


def get_text_client() -> TextCompletionClient:
    return TextCompletionClient()


@router.post("/menu-description", response_model=TextResponse)
async def menu_description(
    request: MenuDescriptionRequest,
    current_staff: RequireManager,
    client: TextCompletionClient = Depends(get_text_client),
):
    return TextResponse(text=await generate_menu_description(client, request.name, request.ingredients))


@router.get("/insights", response_model=TextResponse)
async def manager_insights(
    current_staff: RequireManager,
    state: AppStateDep,
    client: TextCompletionClient = Depends(get_text_client),
):
    """Three short pieces of advice based on today's figures."""
    today = reporting_service.today_local()
    dashboard = reporting_service.manager_dashboard(state.orders, state.tables, today)
    metrics = {
        "revenueToday": float(dashboard.revenue_today),
        "ordersToday": dashboard.orders_today,
        "activeTables": dashboard.occupied_tables,
        "popularItem": reporting_service.best_selling_item(state.orders, today),
        "staffOnDuty": sum(1 for s in state.staff if s.status == StaffStatus.ACTIVE),
    }
    return TextResponse(text=await get_manager_insights(client, metrics))
