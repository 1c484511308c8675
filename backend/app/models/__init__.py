"""ORM Models — SQLAlchemy declarative models backing the SQL repository.

Invariants:
    - All models inherit from Base (db/base.py)
    - Schedule is the aggregate root; members, shifts and templates are scoped by schedule_id
    - Models never leave infrastructure/sql_repository.py; callers get core entities

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from app.models.user import UserModel  # noqa: F401
from app.models.schedule import ScheduleModel  # noqa: F401
from app.models.schedule_member import ScheduleMemberModel  # noqa: F401
from app.models.shift import ShiftModel  # noqa: F401
from app.models.shift_comment import ShiftCommentModel  # noqa: F401
from app.models.rotation_template import RotationTemplateModel  # noqa: F401
