from fastapi import APIRouter, Depends
import logging

from app.core.deps import get_current_user_token_data, get_reading_data, get_readings
from app.schemas.reading import ReadingCreate, ReadingResponse, ReadingsResponse, MessageResponse
from app.schemas.user import TokenData
from app.services.reading_service import ReadingService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ReadingCreate.model_json_schema()}},
        }
    },
)
async def submit_reading(
    token_data: TokenData = Depends(get_current_user_token_data),
    reading_data: ReadingCreate = Depends(get_reading_data),
    reading_service: ReadingService = Depends(get_readings),
):
    """Store one reading for the current user

    The body is read by ``get_reading_data`` so the token check always runs first.
    """
    await reading_service.add_reading(token_data.user_id, reading_data)
    return MessageResponse(message="Reading saved")


@router.get("", response_model=ReadingsResponse)
async def list_readings(
    token_data: TokenData = Depends(get_current_user_token_data),
    reading_service: ReadingService = Depends(get_readings),
):
    """Latest readings for the current user, newest first"""
    readings = await reading_service.list_readings(token_data.user_id)
    return ReadingsResponse(
        readings=[ReadingResponse.model_validate(r.to_dict()) for r in readings]
    )
