"""Service layer for player profiles and credit balances."""

from __future__ import annotations

from bingo.errors import ConflictError, NotFoundError, ValidationError
from bingo.repositories.base import GameRepository
from bingo.repositories.records import ProfileRecord, new_id
from bingo.services.results import returns_result


class ProfileService:
    """Profile use-cases."""

    def __init__(self, repository: GameRepository, starting_credits: int = 0) -> None:
        self._repo = repository
        self._starting_credits = int(starting_credits)

    @returns_result
    def register(self, email: str, display_name: str | None = None) -> ProfileRecord:
        email = (email or "").strip().lower()
        if not email:
            raise ValidationError(message="Email is required", details={"email": ["Required"]})
        if self._repo.get_profile_by_email(email) is not None:
            raise ConflictError(message=f"Email {email} is already registered")

        profile = ProfileRecord(
            id=new_id(),
            email=email,
            display_name=display_name,
            credits=self._starting_credits,
        )
        return self._repo.save_profile(profile)

    @returns_result
    def get_profile(self, user_id: str) -> ProfileRecord:
        profile = self._repo.get_profile(user_id)
        if profile is None:
            raise NotFoundError(message=f"Profile {user_id} not found")
        return profile

    @returns_result
    def add_credits(self, user_id: str, amount: int) -> ProfileRecord:
        if int(amount) <= 0:
            raise ValidationError(message="Valid amount is required", details={"amount": ["Must be > 0"]})

        profile = self._repo.add_credits(user_id, int(amount))
        if profile is None:
            raise NotFoundError(message=f"Profile {user_id} not found")
        return profile
