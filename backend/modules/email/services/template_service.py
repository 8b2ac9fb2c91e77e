# backend/modules/email/services/template_service.py

import logging
from datetime import datetime
from typing import Any, Dict, Tuple

from jinja2 import DictLoader, Environment, TemplateError, select_autoescape

from ..templates.auth_templates import (
    AUTH_TEMPLATES, RESET_SUBJECT, VERIFICATION_SUBJECT,
)

logger = logging.getLogger(__name__)


class EmailRenderError(Exception):
    """Raised when an email template cannot be rendered"""


class AuthEmailRenderer:
    """Renders the auth email templates"""

    TEMPLATES = {
        "verification": ("verification.html", VERIFICATION_SUBJECT),
        "reset": ("reset.html", RESET_SUBJECT),
    }

    def __init__(self, product_name: str, trial_days: int = 14):
        self.product_name = product_name
        self.trial_days = trial_days

        # Initialize Jinja2 environment with auto-escaping
        self.jinja_env = Environment(
            loader=DictLoader(AUTH_TEMPLATES),
            autoescape=select_autoescape(['html', 'xml']),
            trim_blocks=True,
            lstrip_blocks=True
        )

    def render(self, kind: str, action_url: str, user_email: str) -> Tuple[str, str]:
        """
        Render an auth email.

        Args:
            kind: "verification" or "reset"
            action_url: Link the recipient should follow
            user_email: Recipient address, shown in the footer

        Returns:
            (subject, html)
        """
        if kind not in self.TEMPLATES:
            raise EmailRenderError(f"Unknown email template '{kind}'")
        template_name, subject_template = self.TEMPLATES[kind]

        context: Dict[str, Any] = {
            "product_name": self.product_name,
            "trial_days": self.trial_days,
            "action_url": action_url,
            "user_email": user_email,
            "current_year": datetime.utcnow().year,
        }
        try:
            subject = self.jinja_env.from_string(subject_template).render(**context)
            html = self.jinja_env.get_template(template_name).render(**context)
        except TemplateError as e:
            logger.error(f"Error rendering {kind} email: {str(e)}")
            raise EmailRenderError(str(e)) from e
        return subject.strip(), html
