"""Internal constants shared across the library."""

USER_AGENT = "jenkinshue/1.0"
DEFAULT_REQUEST_TIMEOUT: float = 10.0

# ------------------------------------------------------------------
# Jenkins remote access API
# ------------------------------------------------------------------

JOB_PATH = "/job/{job}/api/json"
JOB_TREE = "name,color"
VIEW_PATH = "/view/{view}/api/json"
ROOT_PATH = "/api/json"
VIEW_TREE = "jobs[name,color]"

# ------------------------------------------------------------------
# Hue bridge REST API (v1)
# ------------------------------------------------------------------

LIGHT_PATH = "/api/{username}/lights/{light_id}"
LIGHT_STATE_PATH = "/api/{username}/lights/{light_id}/state"

#: Single breathe cycle; "lselect" would keep breathing for 15 seconds.
ALERT_BLINK: dict[str, str] = {"alert": "select"}

#: "parameter, <name>, is not modifiable. Device is set to off."
HUE_ERROR_DEVICE_OFF = 201
