from fastapi import APIRouter
import logging

from spice_shop.schemas.contact import ContactMessage, ContactAck

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/contact", tags=["contact"])

THANK_YOU = "Dhanyavaad! Hum aapke contact karenge."


@router.post("", response_model=ContactAck)
async def submit_contact(message: ContactMessage):
    """Acknowledge a contact form submission. Nothing is sent anywhere."""
    logger.info(f"Contact form submitted: name={message.name}, email={message.email}")
    return ContactAck(detail=THANK_YOU)
