"""Service wiring.

build_services() creates one set of stores, locks and clock per application
instance; routers reach it through get_services(request).
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from fastapi import Request

from config.settings import Settings
from src.cm_ads.application.service import AdService
from src.cm_ads.infrastructure.memory_store import InMemoryAdRepository
from src.cm_common.datetime_utils import Clock, utc_now
from src.cm_common.locks import KeyedLocks
from src.cm_gateway.user.repository import InMemoryUserRepository
from src.cm_gateway.user.service import UserService
from src.cm_points.application.service import PointsService
from src.cm_points.infrastructure.memory_store import InMemoryBalanceStore, InMemoryLedger
from src.cm_promotion.application.catalog import PlanCatalogService
from src.cm_promotion.application.service import PromotionLifecycleService
from src.cm_promotion.infrastructure.memory_store import (
    InMemoryPlanCatalog,
    InMemoryPromotionRepository,
)
from src.cm_verification.application.service import (
    MobileVerificationService,
    PasswordResetService,
)
from src.cm_verification.infrastructure.delivery import (
    EmailSender,
    Fast2SmsSender,
    SendGridEmailSender,
    SmsSender,
)

logger = logging.getLogger(__name__)


@dataclass
class Services:
    clock: Clock
    users: InMemoryUserRepository
    ads: InMemoryAdRepository
    user_service: UserService
    ad_service: AdService
    points: PointsService
    catalog: PlanCatalogService
    promotions: PromotionLifecycleService
    mobile_verification: MobileVerificationService
    password_reset: PasswordResetService


def build_services(
    settings: Settings,
    clock: Clock = utc_now,
    sms: SmsSender | None = None,
    email: EmailSender | None = None,
) -> Services:
    users = InMemoryUserRepository(clock)
    ads = InMemoryAdRepository(clock)

    points = PointsService(InMemoryBalanceStore(), InMemoryLedger(clock), KeyedLocks())

    promotion_store = InMemoryPromotionRepository()
    catalog = PlanCatalogService(InMemoryPlanCatalog(), promotion_store)
    if settings.SEED_DEFAULT_PLANS:
        seeded = catalog.seed_defaults()
        logger.info("Seeded %d default promotion plans", len(seeded))

    if sms is None:
        sms = Fast2SmsSender(
            settings.FAST2SMS_API_URL,
            settings.FAST2SMS_API_KEY,
            timeout=settings.DELIVERY_TIMEOUT_SECONDS,
        )
    if email is None:
        email = SendGridEmailSender(
            settings.SENDGRID_API_URL,
            settings.SENDGRID_API_KEY,
            settings.SENDGRID_FROM_EMAIL,
            timeout=settings.DELIVERY_TIMEOUT_SECONDS,
        )

    return Services(
        clock=clock,
        users=users,
        ads=ads,
        user_service=UserService(users),
        ad_service=AdService(ads, users, clock),
        points=points,
        catalog=catalog,
        promotions=PromotionLifecycleService(
            points, catalog, promotion_store, ads, users, clock
        ),
        mobile_verification=MobileVerificationService(
            users,
            ads,
            sms,
            ttl=timedelta(minutes=settings.MOBILE_CODE_TTL_MINUTES),
            code_length=settings.VERIFICATION_CODE_LENGTH,
            disclose_undelivered_codes=settings.dev_code_disclosure_enabled,
            clock=clock,
        ),
        password_reset=PasswordResetService(
            users,
            email,
            code_ttl=timedelta(minutes=settings.RESET_CODE_TTL_MINUTES),
            token_ttl=timedelta(minutes=settings.RESET_TOKEN_TTL_MINUTES),
            code_length=settings.VERIFICATION_CODE_LENGTH,
            clock=clock,
        ),
    )


def get_services(request: Request) -> Services:
    """FastAPI dependency: the Services bound to the running app."""
    return request.app.state.services
