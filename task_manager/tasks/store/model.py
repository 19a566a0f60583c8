from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import declarative_base, Mapped, mapped_column

from task_manager.config import get_settings
from task_manager.tasks.schemas import TaskStatus


settings = get_settings()

Base = declarative_base()

_allowed_statuses = ", ".join(f"'{s.value}'" for s in TaskStatus)


class TaskModel(Base):
    __tablename__ = settings.TASKS_TABLE_NAME
    __table_args__ = (
        CheckConstraint(
            f"status IN ({_allowed_statuses})",
            name=f"ck_{settings.TASKS_TABLE_NAME}_status",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskStatus.TODO.value
    )

    def __init__(
        self,
        title: str,
        description: str | None = None,
        status: str = TaskStatus.TODO.value,
    ):
        self.title = title
        self.description = description
        self.status = status
