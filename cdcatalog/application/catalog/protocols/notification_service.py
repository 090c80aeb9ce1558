from typing import Protocol


class NotificationServiceProtocol(Protocol):
    def send(self, subject: str, body: str) -> None:
        """
        Deliver a notification message.

        Raises:
            NotificationError: If the channel cannot be reached
        """
        ...
