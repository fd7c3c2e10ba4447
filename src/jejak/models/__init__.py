from .activity import Activity, PLACEHOLDER_USER_ID
