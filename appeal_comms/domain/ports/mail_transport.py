from abc import ABC, abstractmethod


class MailTransport(ABC):
    """Outbound port for the mail relay shared by all email sends."""

    @abstractmethod
    async def send_email(
        self,
        sender: str,
        recipient: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> str | None:
        """
        Send one email.

        Returns:
            Provider message id, if the provider returns one

        Raises:
            Any provider exception; callers wrap it as DeliveryError
        """
        ...
