import html
import logging
import re
from typing import Dict, List, Optional, Tuple
from sqlalchemy.orm import Session

from shared.data.email_templates import DEFAULT_TEMPLATES
from shared.models.email_template import EmailTemplate
from shared.utils.enums import EmailTemplateType
from ..utils.email_client import EmailClient
from ..core.config import settings

logger = logging.getLogger(__name__)

NOT_PROVIDED = "Not provided"

# links built by the service itself, substituted into bodies as is
RAW_KEYS = frozenset({"ApprovalUrl", "RejectUrl"})

_CONDITIONAL = re.compile(
    r"\{\{#if\s+(\w+)\}\}(.*?)\{\{/if\}\}", re.DOTALL | re.IGNORECASE)


class EmailHelper:
    """Reusable helper to send templated emails via EmailClient."""

    def __init__(self):
        self.mailer = EmailClient(
            smtp_host=settings.SMTP_HOST,
            smtp_port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            use_ssl=settings.SMTP_USE_SSL,
            timeout=settings.SMTP_TIMEOUT_SECONDS,
        )

    @staticmethod
    def render(template: str, data: Dict[str, str], escape: bool = False) -> str:
        """Substitute {{Key}} placeholders, then resolve {{#if Key}}...{{/if}} blocks.

        Blocks are not nested. A block survives when its key is present,
        non-empty and not "Not provided". With escape set, values are HTML
        escaped except the keys in RAW_KEYS.
        """
        result = template or ""
        for key, value in data.items():
            text = "" if value is None else str(value)
            if escape and key not in RAW_KEYS:
                text = html.escape(text)
            result = result.replace("{{" + key + "}}", text)

        def _keep(match: re.Match) -> str:
            value = data.get(match.group(1))
            if value and value != NOT_PROVIDED:
                return match.group(2)
            return ""

        return _CONDITIONAL.sub(_keep, result)

    def _fetch_template(self, db: Session, template_type: EmailTemplateType) -> Tuple[str, str]:
        """Active template from DB, else the built-in default. Returns (subject, body)."""
        template = (
            db.query(EmailTemplate)
            .filter(
                EmailTemplate.template_type == template_type.value,
                EmailTemplate.is_active == True,
            )
            .order_by(EmailTemplate.id)
            .first()
        )
        if template:
            return template.subject, template.body

        _, subject, body = DEFAULT_TEMPLATES[template_type]
        return subject, body

    def send_email(
        self,
        recipients: List[str],
        subject: str,
        html_body: str,
        high_priority: bool = False
    ) -> bool:
        if not settings.EMAIL_ENABLED:
            logger.info(
                f"Email disabled, skipping '{subject}' to {', '.join(recipients)}")
            return False

        return self.mailer.send_email(
            sender=settings.EMAIL_SENDER,
            sender_name=settings.EMAIL_SENDER_NAME,
            recipients=recipients,
            subject=subject,
            text_body=self._strip_html_tags(html_body),
            html_body=html_body,
            high_priority=high_priority,
        )

    def build_email(
        self,
        db: Session,
        template_type: EmailTemplateType,
        data: Dict[str, str]
    ) -> Tuple[str, str]:
        """Rendered (subject, html body) for a template type."""
        subject_template, body_template = self._fetch_template(db, template_type)
        return self.render(subject_template, data), self.render(body_template, data, escape=True)

    @staticmethod
    def _strip_html_tags(html: Optional[str]) -> str:
        """Basic HTML to plain text converter."""
        return re.sub("<.*?>", "", html or "", flags=re.DOTALL)
