"""Mensajes de creación de ticket al completar la conversación."""

creating_ticket = (
    "✅ Perfect! I'm creating your support ticket now...\n"
    "\n"
    "Your ticket will be created with all the details we've collected. "
    "Our support team will review it and get back to you soon."
)

ticket_creation_failed = (
    "❌ I apologize, but there was an issue creating your ticket. "
    "Please try again or contact support directly.\n"
    "\n"
    "Error: Unable to create ticket at this time."
)

