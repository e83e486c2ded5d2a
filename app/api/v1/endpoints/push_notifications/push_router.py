from fastapi import APIRouter, Depends

from app.schemas.backend_schemas.push_schemas import PushTestResponse
from app.services.authorization import Caller, ensure
from app.services.dependencies import get_caller
from app.services.push_notification_service import send_push


router = APIRouter(prefix="/push", tags=["Push"])


@router.post("/test", response_model=PushTestResponse)
def send_test_notification(caller: Caller = Depends(get_caller)):
    ensure(caller.is_admin, "Only admins can send test notifications")

    result = send_push(
        "Test Notification",
        "This is a test notification from your Departmental Portal!",
    )
    return {
        "message": "Notification sent successfully!",
        "id": result.get("id"),
        "recipients": result.get("recipients"),
    }
