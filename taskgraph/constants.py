TASK_STATUS_TODO = "todo"
TASK_STATUS_COMPLETED = "completed"
TASK_STATUSES = (TASK_STATUS_TODO, TASK_STATUS_COMPLETED)

# Task box metrics used when no font metrics are available.
TASK_PADDING_X = 12.0
TASK_PADDING_Y = 8.0
TASK_CHAR_WIDTH = 7.0
TASK_LINE_HEIGHT = 16.0
TASK_MIN_WIDTH = 40.0

EDGE_MARGIN = 8.0
EDGE_LINE_WIDTH = 2
EDGE_ARROW_SIZE = 9.0

DRAG_THRESHOLD = 5.0

ZOOM_SNAP_TARGET = 1.0
ZOOM_SNAP_TOLERANCE = 0.1
ZOOM_IN_FACTOR = 1.15
ZOOM_OUT_FACTOR = 0.85
MIN_ZOOM = 0.1
MAX_ZOOM = 8.0

DEFAULT_VIEWPORT_WIDTH = 800.0
DEFAULT_VIEWPORT_HEIGHT = 600.0

MOUSE_POINTER_ID = 1

TASK_FILL_COLOR = "#FFFFFF"
TASK_SELECTED_FILL_COLOR = "#D6E6FF"
TASK_BORDER_COLOR = "#1E1E1E"
TASK_SELECTED_BORDER_COLOR = "#2F6FD6"
TASK_COMPLETED_TEXT_COLOR = "#8A8A8A"
TASK_TEXT_COLOR = "#141414"
EDGE_COLOR = "#4A4A4A"
EDGE_PREVIEW_COLOR = "#2F6FD6"
CANVAS_BACKGROUND_COLOR = "#F7F7F5"

SETTINGS_ORGANIZATION = "TaskGraph"
SETTINGS_APPLICATION = "TaskGraph"
AUTOSAVE_FILE_NAME = "graph.json"
