from .git import list_tags, run_git
from .hashing import md5_base64
from .ids import new_op_id, new_plan_id, new_uuid
from .mime import DEFAULT_CONTENT_TYPE, guess_content_type
from .time import now_utc

__all__ = [
    "new_uuid",
    "new_plan_id",
    "new_op_id",
    "md5_base64",
    "DEFAULT_CONTENT_TYPE",
    "guess_content_type",
    "now_utc",
    "list_tags",
    "run_git",
]
