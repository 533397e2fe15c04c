"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Element anchors expected in the host page
# ------------------------------------------------------------------

STAMP_PANEL = "StampView"
STAMP_LIST = "stampList"
SHOW_GUIDE_BUTTON = "ShowGuideButton"

GUIDE_MODAL = "GuideModalContainer"
GUIDE_MODAL_CLOSE = "GuideModalCloseButton"
GUIDE_VIDEO = "GuideVideo"
GUIDE_TITLE = "GuideTitle"
GUIDE_HINT = "GuideHint"
GUIDE_TEXT = "GuideText"
NEXT_GUIDE_BUTTON = "NextGuideButton"
REPLAY_GUIDE_BUTTON = "ReplayGuideButton"
REPLAY_CONTAINER = "ReplayButtonContainer"
PRIVACY_CONTAINER = "PrivacyPolicyCheckboxContainer"
STUDENT_ID_INPUT = "StudentIdInput"
STUDENT_NAME_INPUT = "StudentNameInput"

CLASS_INFO_MODAL = "ClassInfoModalContainer"
CLASS_INFO_TITLE = "ClassInfoModalTitle"
CLASS_INFO_CLOSE = "ClassInfoModalCloseButton"


def floor_map_id(floor: int) -> str:
    return f"Floor{floor}MapView"


def floor_selector_id(floor: int) -> str:
    return f"Floor{floor}"


FLOOR_HASH_PREFIX = "#Floor"

# ------------------------------------------------------------------
# Marker classes
# ------------------------------------------------------------------

CLASSROOM_CLASS = "classroom"
NOT_CLASSROOM_CLASS = "notClassroom"
HALLWAY_CLASS = "hallway"
STAMP_CLASS = "stamp"
CHECKED_CLASS = "checked"
OPEN_CLASS = "open"
ACTIVE_CLASS = "active"
SELECTED_CLASS = "selected"
SHOW_CLASS = "show"

# Tags of the content rendered inside one stamp entry.
STAMP_CONTENT_TAGS: frozenset[str] = frozenset({"img", "h2", "p", "span"})

# ------------------------------------------------------------------
# Persisted store keys
# ------------------------------------------------------------------

STAMP_RECORD_KEY = "LocalStamp"
GUIDE_SHOWN_KEY = "ShowGuide"
USER_ID_KEY = "user_id"
USER_NAME_KEY = "user_name"

# ------------------------------------------------------------------
# Server endpoints
# ------------------------------------------------------------------

STAMP_LIST_ENDPOINT = "/api/stampList.json"
CLASS_LIST_ENDPOINT = "/api/classList.json"
LOGIN_ENDPOINT = "/login"


def stamp_info_endpoint(stamp_id: str) -> str:
    return f"/api/stamp/{stamp_id}.json"


def classroom_info_endpoint(classroom_id: str) -> str:
    return f"/api/classroom/{classroom_id}.json"


# ------------------------------------------------------------------
# Identity capture
# ------------------------------------------------------------------

STUDENT_ID_LENGTH = 5
MIN_NAME_LENGTH = 2
