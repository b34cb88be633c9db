"""Port interface for the category tree."""

from abc import ABC, abstractmethod

from helpdesk_dispatch.domain.entities.category import Category


class CategoryRepository(ABC):
    @abstractmethod
    async def get_by_id(self, category_id: str) -> Category | None:
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Category | None:
        ...
