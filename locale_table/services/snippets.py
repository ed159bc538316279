from __future__ import annotations

KEY_PLACEHOLDER = "{key}"


def render_copy_text(key: str, *, use_template: bool, template: str) -> str:
    """
    Text handed to the clipboard for a key: the key itself, or the key
    substituted into a framework template such as ``t('{key}')``.

    Plain substitution is used because templates legitimately contain other
    braces (``{{ '{key}' | translate }}``).
    """
    if not use_template:
        return key
    return template.replace(KEY_PLACEHOLDER, key)
