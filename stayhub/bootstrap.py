from pathlib import Path
from typing import Any, Dict, Optional

from .administration.application import DashboardService
from .bookings.application import BookingApplicationService, BookingCompletionSweep
from .bookings.infrastructure import BookingRepository
from .config import Settings, configure_logging, get_settings
from .favorites.application import FavoriteRegistry
from .favorites.infrastructure import FavoriteRepository
from .hosting.application import HostOnboardingService, UserApplicationService
from .hosting.infrastructure import UserRepository
from .listings.application import ListingApplicationService
from .listings.infrastructure import ListingRepository
from .reviews.application import RatingAggregator, ReviewApplicationService
from .reviews.infrastructure import ReviewRepository
from .shared_kernel import StructlogLogger


def bootstrap_app(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Создает и настраивает все компоненты приложения."""
    settings = settings or get_settings()
    configure_logging(settings)
    logger = StructlogLogger("stayhub")

    def data_file(name: str) -> Optional[Path]:
        if settings.storage_backend != "json":
            return None
        return settings.data_dir / f"{name}.json"

    # 1. Репозитории всех контекстов
    users = UserRepository(data_file("users"), logger=logger)
    listings = ListingRepository(data_file("listings"), logger=logger)
    bookings = BookingRepository(data_file("bookings"), logger=logger)
    reviews = ReviewRepository(data_file("reviews"), logger=logger)
    favorites = FavoriteRepository(data_file("favorites"), logger=logger)

    # 2. Сервисы, которым репозитории передаются как зависимости
    attempts = settings.max_update_attempts
    aggregator = RatingAggregator(
        reviews, listings, logger=logger, max_update_attempts=attempts
    )

    logger.info(
        "stayhub.bootstrapped",
        storage_backend=settings.storage_backend,
        data_dir=str(settings.data_dir),
    )

    return {
        "users": UserApplicationService(users, logger=logger),
        "hosting": HostOnboardingService(
            users, logger=logger, max_update_attempts=attempts
        ),
        "listings": ListingApplicationService(
            listings, users, logger=logger, max_update_attempts=attempts
        ),
        "bookings": BookingApplicationService(
            bookings, listings, logger=logger, max_update_attempts=attempts
        ),
        "completion_sweep": BookingCompletionSweep(
            bookings, logger=logger, max_update_attempts=attempts
        ),
        "reviews": ReviewApplicationService(
            reviews, bookings, aggregator, logger=logger, max_update_attempts=attempts
        ),
        "rating_aggregator": aggregator,
        "favorites": FavoriteRegistry(favorites, listings, logger=logger),
        "dashboard": DashboardService(users, listings, bookings, logger=logger),
    }
