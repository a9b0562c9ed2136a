# Models package — import all models here so Alembic can discover them.

from consultdesk.models.user import User  # noqa: F401
from consultdesk.models.consultation import ConsultationRequest  # noqa: F401
from consultdesk.models.activity import ActivityEntry  # noqa: F401
from consultdesk.models.settings import (  # noqa: F401
    AdminSettings,
    AnalyticsSettings,
    SeoSettings,
)
from consultdesk.models.email import EmailLog, EmailTemplate  # noqa: F401
