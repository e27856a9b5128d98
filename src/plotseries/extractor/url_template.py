"""
Per-point hyperlink templating.
"""

from __future__ import annotations

NAME_PLACEHOLDER = "%name%"
INDEX_PLACEHOLDER = "%index%"
BUILD_PLACEHOLDER = "%build%"


def apply_url_template(template: str | None, label: str | None, index: int, build_number: int) -> str | None:
    """Fill the ``%name%``, ``%index%`` and ``%build%`` placeholders of *template*.

    Substitution runs in that order, so a label that itself contains
    ``%index%`` or ``%build%`` is expanded by the later steps. A ``None``
    template stays ``None``; PlotPoint turns it into an empty url.
    """
    if template is None:
        return None

    url = template
    if NAME_PLACEHOLDER in url:
        url = url.replace(NAME_PLACEHOLDER, label or "")
    if INDEX_PLACEHOLDER in url:
        url = url.replace(INDEX_PLACEHOLDER, str(index))
    if BUILD_PLACEHOLDER in url:
        url = url.replace(BUILD_PLACEHOLDER, str(build_number))
    return url
