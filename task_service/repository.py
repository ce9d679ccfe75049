import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from task_service.errors import TaskNotFound, TaskValidationError
from task_service.models import DEFAULT_STATUS, STATUSES, Task

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Title is required"
DESCRIPTION_REQUIRED = "Description is required"
INVALID_STATUS = "Status must be one of: " + ", ".join(STATUSES)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_task_id() -> str:
    return str(uuid.uuid4())


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_task_fields(title: Optional[str], description: Optional[str], status: Optional[str]) -> None:
    """Check title, then description, then status; raise on the first failure."""
    if _is_blank(title):
        raise TaskValidationError(TITLE_REQUIRED)
    if _is_blank(description):
        raise TaskValidationError(DESCRIPTION_REQUIRED)
    # An empty status counts as "not supplied".
    if status and status not in STATUSES:
        raise TaskValidationError(INVALID_STATUS)


class TaskRepository:
    """In-memory, insertion-ordered store of tasks.

    All operations hold one lock for their whole read-modify-write, so the
    repository can be shared by request handlers running on a thread pool.
    Tasks handed out are copies; mutating them does not touch the store.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_task_id,
    ):
        self._tasks: List[Task] = []
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def _find_index(self, task_id: str) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise TaskNotFound(task_id)

    def _touch(self, task: Task) -> None:
        now = self._clock()
        if now < task.updatedAt:
            now = task.updatedAt
        task.updatedAt = now

    def _next_id(self) -> str:
        task_id = self._id_factory()
        while any(task.id == task_id for task in self._tasks):
            task_id = self._id_factory()
        return task_id

    def seed(self, tasks: Iterable[Task]) -> None:
        with self._lock:
            for task in tasks:
                if any(existing.id == task.id for existing in self._tasks):
                    raise ValueError(f"duplicate task id: {task.id}")
                self._tasks.append(task.model_copy())
            logger.debug("Seeded repository, %d tasks stored", len(self._tasks))

    def list(self, filter_status: Optional[str] = None, search_term: Optional[str] = None) -> List[Task]:
        with self._lock:
            tasks = self._tasks
            if filter_status in STATUSES:
                tasks = [task for task in tasks if task.status == filter_status]
            if search_term:
                term = search_term.lower()
                tasks = [
                    task
                    for task in tasks
                    if term in task.title.lower() or term in task.description.lower()
                ]
            # sorted() is stable with reverse=True, so equal timestamps keep insertion order
            tasks = sorted(tasks, key=lambda task: task.createdAt, reverse=True)
            return [task.model_copy() for task in tasks]

    def get(self, task_id: str) -> Task:
        with self._lock:
            return self._tasks[self._find_index(task_id)].model_copy()

    def create(self, title: Optional[str], description: Optional[str], status: Optional[str] = None) -> Task:
        validate_task_fields(title, description, status)
        with self._lock:
            now = self._clock()
            task = Task(
                id=self._next_id(),
                title=title.strip(),
                description=description.strip(),
                status=status or DEFAULT_STATUS,
                createdAt=now,
                updatedAt=now,
            )
            self._tasks.append(task)
            logger.info("Created task %s (%s)", task.id, task.status)
            return task.model_copy()

    def update(
        self,
        task_id: str,
        title: Optional[str],
        description: Optional[str],
        status: Optional[str] = None,
    ) -> Task:
        with self._lock:
            task = self._tasks[self._find_index(task_id)]
            validate_task_fields(title, description, status)
            task.title = title.strip()
            task.description = description.strip()
            if status:
                task.status = status
            self._touch(task)
            logger.info("Updated task %s", task_id)
            return task.model_copy()

    def patch_status(self, task_id: str, status: Optional[str]) -> Task:
        with self._lock:
            task = self._tasks[self._find_index(task_id)]
            if status not in STATUSES:
                raise TaskValidationError(INVALID_STATUS)
            task.status = status
            self._touch(task)
            logger.info("Task %s moved to %s", task_id, status)
            return task.model_copy()

    def delete(self, task_id: str) -> Task:
        with self._lock:
            task = self._tasks.pop(self._find_index(task_id))
            logger.info("Deleted task %s", task_id)
            return task

    def list_statuses(self) -> List[str]:
        return list(STATUSES)


def sample_tasks() -> List[Task]:
    """The demo data set the service can boot with."""

    def day(text: str) -> datetime:
        return datetime.fromisoformat(text).replace(tzinfo=timezone.utc)

    return [
        Task(
            id="1",
            title="Complete Project Proposal",
            description="Write and submit the project proposal document",
            status="completed",
            createdAt=day("2024-01-15"),
            updatedAt=day("2024-01-20"),
        ),
        Task(
            id="2",
            title="Review Code Changes",
            description="Review pull requests and provide feedback",
            status="in-progress",
            createdAt=day("2024-01-18"),
            updatedAt=day("2024-01-22"),
        ),
        Task(
            id="3",
            title="Plan Team Meeting",
            description="Schedule and prepare agenda for weekly team meeting",
            status="pending",
            createdAt=day("2024-01-20"),
            updatedAt=day("2024-01-20"),
        ),
    ]
