from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Generic, List, TypeVar
import logging

logger = logging.getLogger(__name__)

# Type variables for generics
T = TypeVar('T')  # Generic type for raw data
R = TypeVar('R')  # Generic type for normalized data


class EntityType(str, Enum):
    """Catalog entities a normalizer knows how to produce."""
    GAME_SUMMARY = "game_summary"
    GAME_SEARCH_RESULT = "game_search_result"
    GAME_DETAIL = "game_detail"
    NAME = "name"


class DataNormalizer(Generic[T, R], ABC):
    """
    Abstract base interface for data normalizers.

    A normalizer reshapes the irregular records of one external API into the
    flat records the response schemas validate. It never validates types
    itself; it only extracts, and raises ``NormalizationError`` when a nested
    field it must dereference is absent.

    Type Parameters:
        T: The type of a raw record from the external API
        R: The type of a normalized record
    """

    @abstractmethod
    def normalize_game_summary(self, raw_data: T) -> R:
        """
        Normalizes one listing record into the game summary shape.

        Raises:
            NormalizationError: If a nested field is absent
        """
        pass

    @abstractmethod
    def normalize_game_search_result(self, raw_data: T) -> R:
        """
        Normalizes one listing record into the search result shape.

        Raises:
            NormalizationError: If a nested field is absent
        """
        pass

    @abstractmethod
    def normalize_game_detail(self, raw_data: T) -> R:
        """
        Normalizes a detail payload, sanitizing its description.

        Raises:
            NormalizationError: If a nested field or the description is absent
        """
        pass

    @abstractmethod
    def normalize_name(self, raw_data: T) -> Any:
        """
        Pulls the ``name`` out of a genre or platform listing record.

        Raises:
            NormalizationError: If the record has no name
        """
        pass

    @abstractmethod
    def extract_results(self, response: Any) -> List[T]:
        """
        Returns the result records of a listing response.

        Raises:
            NormalizationError: If the response carries no result list
        """
        pass

    def normalize(self, raw_data: T, entity_type: EntityType) -> Any:
        """
        Generic normalize method that routes to specific normalizers based on entity type.

        Args:
            raw_data: Raw record from external API
            entity_type: Type of entity to normalize

        Returns:
            The normalized record

        Raises:
            ValueError: If the entity type is unsupported
        """
        handlers = {
            EntityType.GAME_SUMMARY: self.normalize_game_summary,
            EntityType.GAME_SEARCH_RESULT: self.normalize_game_search_result,
            EntityType.GAME_DETAIL: self.normalize_game_detail,
            EntityType.NAME: self.normalize_name,
        }
        handler = handlers.get(entity_type)
        if handler is None:
            logger.error(f"Unsupported entity type for normalization: {entity_type}")
            raise ValueError(f"Unsupported entity type: {entity_type}")
        return handler(raw_data)

    def normalize_many(self, raw_records: List[T], entity_type: EntityType) -> List[Any]:
        """Normalizes a list of records, preserving order."""
        return [self.normalize(record, entity_type) for record in raw_records]
