"""Email notification package.

Renders localized Jinja2 templates and delivers them per recipient over
SMTP (or the console transport outside production), aggregating
per-recipient failures into one ``DeliveryFailedError``.
"""
