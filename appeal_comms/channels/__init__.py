from .chat import ChatGateway
from .email import EmailGateway, render_email_html, render_email_text
from .sms import SmsGateway

__all__ = [
    "ChatGateway",
    "EmailGateway",
    "SmsGateway",
    "render_email_html",
    "render_email_text",
]
