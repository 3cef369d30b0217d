# ABOUTME: Jinja2 templates for transactional email subjects and bodies.
# ABOUTME: One subject/body pair per EmailKind, rendered with autoescaping.

from enum import Enum

from jinja2 import DictLoader, Environment, select_autoescape


class EmailKind(str, Enum):
    """Kinds of transactional email."""

    CONNECTION_REQUEST = "connection_request"
    CONNECTION_ACCEPTED = "connection_accepted"
    INVITATION = "invitation"


_LAYOUT = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>{% block title %}{% endblock %}</title></head>
<body style="font-family: sans-serif; color: #1f2937;">
  {% block content %}{% endblock %}
  <p style="color: #6b7280; font-size: 12px;">{{ event_name }}</p>
</body>
</html>
"""

TEMPLATES: dict[str, str] = {
    "layout.html": _LAYOUT,
    "connection_request.subject": "{{ requester_name }} wants to connect with you",
    "connection_request.html": """{% extends "layout.html" %}
{% block title %}New connection request{% endblock %}
{% block content %}
  <h1>{{ requester_name }} wants to connect</h1>
  {% if subtitle %}<p>{{ subtitle }}</p>{% endif %}
  <p><a href="{{ profile_url }}">View profile</a></p>
  <p><a href="{{ connections_url }}">Review pending requests</a></p>
{% endblock %}
""",
    "connection_accepted.subject": "{{ accepter_name }} accepted your connection request",
    "connection_accepted.html": """{% extends "layout.html" %}
{% block title %}Connection accepted{% endblock %}
{% block content %}
  <h1>You are now connected with {{ accepter_name }}</h1>
  {% if subtitle %}<p>{{ subtitle }}</p>{% endif %}
  <p><a href="{{ profile_url }}">See their contact details</a></p>
{% endblock %}
""",
    "invitation.subject": "{{ inviter_name }} invited you to {{ event_name }}",
    "invitation.html": """{% extends "layout.html" %}
{% block title %}You're invited{% endblock %}
{% block content %}
  <h1>{{ inviter_name }} invited you to {{ event_name }}</h1>
  <p><a href="{{ invitation_url }}">Accept the invitation</a></p>
  <p>This link expires in {{ ttl_days }} days.</p>
{% endblock %}
""",
}

_environment = Environment(
    loader=DictLoader(TEMPLATES),
    autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
)


def render_email(kind: EmailKind, template_data: dict) -> tuple[str, str]:
    """Render the subject and HTML body for an email.

    Args:
        kind: Which email to render.
        template_data: Values available to the templates.

    Returns:
        Tuple of (subject, html).
    """
    subject = _environment.get_template(f"{kind.value}.subject").render(**template_data)
    html = _environment.get_template(f"{kind.value}.html").render(**template_data)
    return subject.strip(), html
