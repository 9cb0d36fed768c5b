from activator.application.activator import Activator
from activator.application.config import ActivatorConfig
from activator.domain.ports.email_port import EmailPort
from activator.domain.ports.notifier import NotifierPort
from activator.domain.ports.user_store import ThrottlePort, UserStorePort
from activator.infrastructure.db.pool import get_pool
from activator.infrastructure.db.users_store import PgUserStore
from activator.infrastructure.email.http_smtp_adapter import HttpSmtpEmailAdapter
from activator.infrastructure.email.smtp_adapter import SmtpEmailAdapter
from activator.infrastructure.email.template_notifier import TemplateNotifier
from activator.infrastructure.redis_cache.pool import get_redis
from activator.infrastructure.redis_cache.throttle import RedisIssueThrottle
from activator.infrastructure.security.password import password_hasher
from activator.settings import Settings


def get_user_store(settings: Settings) -> UserStorePort:
    return PgUserStore(
        get_pool(settings), table=settings.users_table, id_column=settings.id_property
    )


def get_email_adapter(settings: Settings) -> EmailPort:
    if settings.mail_transport == "smtp":
        return SmtpEmailAdapter(
            settings.smtp_host,
            settings.smtp_port,
            mail_from=settings.mail_from,
            user=settings.smtp_user,
            password=settings.smtp_password,
            starttls=settings.smtp_starttls,
        )
    return HttpSmtpEmailAdapter(
        base_url=settings.smtp_base_url,
        mail_from=settings.mail_from,
        retries=settings.mail_retries,
    )


def get_notifier(settings: Settings, email: EmailPort) -> NotifierPort:
    return TemplateNotifier(email, settings.templates_dir)


def get_throttle(settings: Settings) -> ThrottlePort | None:
    if settings.resend_throttle_seconds <= 0:
        return None
    return RedisIssueThrottle(
        get_redis(settings),
        ttl_seconds=settings.resend_throttle_seconds,
        id_property=settings.id_property,
    )


def build_config(
    settings: Settings,
    *,
    store: UserStorePort | None = None,
    notifier: NotifierPort | None = None,
    throttle: ThrottlePort | None = None,
    **overrides,
) -> ActivatorConfig:
    """Map Settings onto an ActivatorConfig; keyword overrides win."""
    options = dict(
        store=store,
        notifier=notifier,
        throttle=throttle,
        reset_expire_minutes=settings.reset_expire_minutes,
        id_property=settings.id_property,
        email_property=settings.email_property,
        password_property=settings.password_property,
        protocol=settings.link_protocol,
        domain=settings.link_domain,
        paths=settings.paths,
        subjects=settings.subjects,
        language=settings.mail_language,
        password_hasher=password_hasher(settings.bcrypt_rounds),
    )
    options.update(overrides)
    return ActivatorConfig(**options)


def build_activator(settings: Settings, **kwargs) -> Activator:
    return Activator(build_config(settings, **kwargs))
