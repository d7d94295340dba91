"""Client lookups scoped to a coach."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from coach_nutrition.domain.errors import ClientNotFoundError
from coach_nutrition.domain.models import ClientRecord


class ClientRepository(Protocol):
    """Persistence interface for a coach's clients."""

    def get_client(self, coach_id: UUID, client_id: UUID) -> ClientRecord | None:
        """Return a client of the coach, if present."""

    def list_clients(self, coach_id: UUID) -> list[ClientRecord]:
        """Return all clients of the coach ordered by name."""


@dataclass
class ClientService:
    """Application service for client lookups."""

    repository: ClientRepository

    def require_client(self, coach_id: UUID, client_id: UUID) -> ClientRecord:
        """Return a client of the coach or raise ClientNotFoundError."""
        client = self.repository.get_client(coach_id, client_id)
        if client is None:
            raise ClientNotFoundError(f"Client {client_id} not found")
        return client

    def list_clients_with_goals(self, coach_id: UUID) -> list[ClientRecord]:
        """Return the coach's clients that have at least one target set."""
        return [
            client
            for client in self.repository.list_clients(coach_id)
            if client.has_goals()
        ]
