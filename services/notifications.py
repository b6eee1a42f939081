from flask import flash, get_flashed_messages

VARIANTS = ("default", "destructive")


def notify(title, description, variant="default"):
    """Queue a toast for the next rendered page."""
    if variant not in VARIANTS:
        raise ValueError(f"Unknown toast variant '{variant}'")
    flash({"title": title, "description": description}, variant)


def pending_toasts():
    return [
        {"variant": variant, "title": message["title"], "description": message["description"]}
        for variant, message in get_flashed_messages(with_categories=True)
    ]
