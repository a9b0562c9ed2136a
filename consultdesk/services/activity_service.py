"""Activity feed — event logging, manual notes, feed stats.

log_event() is the hook every create/update/delete calls after its own
commit. It is best-effort: a failed activity write is logged and
dropped so it never undoes or blocks the primary write.
"""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import or_

from consultdesk.models.activity import ActivityEntry
from consultdesk.services import store
from consultdesk.services.store import PersistenceError

logger = logging.getLogger(__name__)

# type -> (icon, color)
EVENT_STYLES = {
    "consultation_booked": ("FiCalendar", "green"),
    "consultation_confirmed": ("FiCheckCircle", "blue"),
    "consultation_completed": ("FiAward", "purple"),
    "consultation_rejected": ("FiXCircle", "red"),
    "consultation_cancelled": ("FiXCircle", "gray"),
    "consultation_updated": ("FiEdit3", "blue"),
    "consultation_deleted": ("FiTrash2", "red"),
    "settings_updated": ("FiSettings", "blue"),
    "template_updated": ("FiEdit3", "purple"),
    "urgent_follow_up": ("FiActivity", "red"),
    "note": ("FiMessageSquare", "blue"),
}


def log_event(event_type, title, description=None, consultation_id=None,
              value=None, actor_user_id=None, actionable=False):
    """Append one activity entry for a domain event. Never raises on store failure.

    Returns the entry, or None if the write failed.
    """
    icon, color = EVENT_STYLES.get(event_type, ("FiActivity", "gray"))
    try:
        return store.insert("activities", {
            "type": event_type,
            "title": title,
            "description": description,
            "icon": icon,
            "color": color,
            "consultation_id": consultation_id,
            "value": value,
            "actor_user_id": actor_user_id,
            "actionable": actionable,
        })
    except PersistenceError as e:
        logger.warning(f"Activity entry '{event_type}' not recorded: {e}")
        return None


def add_entry(title, description=None, activity_type="note", icon="FiMessageSquare",
              color="blue", actionable=False, follow_up=False, actor_user_id=None):
    """Create a manual activity entry from the admin feed.

    Raises:
        ValueError: If title is empty or type/icon/color is unknown.
    """
    title = (title or "").strip()
    if not title:
        raise ValueError("Title is required.")
    if activity_type not in ActivityEntry.TYPES:
        raise ValueError(f"Invalid activity type '{activity_type}'.")
    if icon not in ActivityEntry.ICONS:
        raise ValueError(f"Invalid icon '{icon}'.")
    if color not in ActivityEntry.COLORS:
        raise ValueError(f"Invalid color '{color}'.")

    return store.insert("activities", {
        "type": activity_type,
        "title": title,
        "description": (description or "").strip() or None,
        "icon": icon,
        "color": color,
        "actionable": bool(actionable),
        "follow_up": bool(follow_up),
        "actor_user_id": actor_user_id,
    })


def complete_entry(entry_id):
    if store.get("activities", entry_id) is None:
        raise ValueError("Activity not found.")
    return store.update("activities", entry_id, {"completed": True})


def delete_entry(entry_id):
    if store.get("activities", entry_id) is None:
        raise ValueError("Activity not found.")
    store.delete("activities", entry_id)


def list_entries(activity_type=None, search=None, limit=None):
    """Newest-first feed, optionally filtered by type and title/description text."""
    query = ActivityEntry.query
    if activity_type and activity_type != "all":
        query = query.filter(ActivityEntry.type == activity_type)
    if search:
        like = f"%{search}%"
        query = query.filter(
            or_(
                ActivityEntry.title.ilike(like),
                ActivityEntry.description.ilike(like),
            )
        )
    query = query.order_by(ActivityEntry.timestamp.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def feed_stats(now=None):
    """Counts shown above the activity feed.

    - today: entries since midnight (UTC)
    - this_week: entries since the most recent Sunday midnight
    - pending_actions: actionable entries not yet completed
    - urgent_items: pending actions whose type mentions urgent/high
    """
    now = now or datetime.now(timezone.utc)
    today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    # Python weekday(): Monday=0 ... Sunday=6
    week_start = today_start - timedelta(days=(today_start.weekday() + 1) % 7)

    pending = ActivityEntry.query.filter(
        ActivityEntry.actionable.is_(True),
        ActivityEntry.completed.is_(False),
    )

    return {
        "today": ActivityEntry.query.filter(ActivityEntry.timestamp >= today_start).count(),
        "this_week": ActivityEntry.query.filter(ActivityEntry.timestamp >= week_start).count(),
        "pending_actions": pending.count(),
        "urgent_items": pending.filter(
            or_(
                ActivityEntry.type.contains("urgent"),
                ActivityEntry.type.contains("high"),
            )
        ).count(),
    }
