"""In-memory entity store with JSON snapshot persistence."""

import json
import logging
from dataclasses import dataclass
from operator import attrgetter
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Type, TypeVar

from ..models.decision import Decision
from ..models.meeting import Meeting
from ..models.observation import ClassroomWalkthrough, RubricComponent
from ..models.task import Category, ProjectTask
from .exceptions import EntityNotFoundError, QueryError, StoreLoadError, UnknownEntityError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MODELS = (ProjectTask, Category, Meeting, Decision, ClassroomWalkthrough, RubricComponent)

SNAPSHOT_VERSION = 1


@dataclass(frozen=True)
class SortDescriptor:
    """Sort by one attribute; several descriptors form a multi-key sort."""

    attribute: str
    reverse: bool = False


class EntityStore:
    """Holds every record, keyed by type and id, in insertion order.

    Ownership is explicit: subtasks belong to their parent task, tasks to
    their category and rubric components to their observation, and deleting
    the owner deletes them. References to a meeting are cleared, not
    cascaded, when the meeting goes away.
    """

    def __init__(self):
        """Initialize one empty collection per record type."""
        self._collections: Dict[type, Dict[str, Any]] = {model: {} for model in MODELS}

    def _collection(self, model: type) -> Dict[str, Any]:
        """Collection for a record type, or UnknownEntityError."""
        try:
            return self._collections[model]
        except KeyError:
            raise UnknownEntityError(f"Unsupported record type: {model.__name__}") from None

    # Create / delete

    def insert(self, record: Any) -> None:
        """Add a record (and the children it owns) to the store."""
        collection = self._collection(type(record))
        collection[record.id] = record
        logger.debug("Inserted %s %s", type(record).__name__, record.id)

        if isinstance(record, ProjectTask):
            for subtask in record.subtasks:
                subtask.parent_id = record.id
                self.insert(subtask)
            self._link_to_parent(record)
        elif isinstance(record, ClassroomWalkthrough):
            for component in record.components:
                component.observation_id = record.id
                self.insert(component)
        elif isinstance(record, RubricComponent):
            self._link_to_observation(record)

    def delete(self, record: Any) -> None:
        """Remove a record, cascading to owned children."""
        collection = self._collection(type(record))
        if record.id not in collection:
            raise EntityNotFoundError(f"{type(record).__name__} {record.id} is not in the store")

        if isinstance(record, ProjectTask):
            self._delete_task(record)
        elif isinstance(record, Category):
            del collection[record.id]
            for task in list(self._collections[ProjectTask].values()):
                if task.category_id == record.id:
                    self._delete_task(task)
        elif isinstance(record, ClassroomWalkthrough):
            del collection[record.id]
            for component in record.components:
                self._collections[RubricComponent].pop(component.id, None)
        elif isinstance(record, RubricComponent):
            del collection[record.id]
            observation = self._collections[ClassroomWalkthrough].get(record.observation_id)
            if observation is not None:
                observation.components = [c for c in observation.components if c.id != record.id]
        elif isinstance(record, Meeting):
            del collection[record.id]
            self._orphan_meeting_references(record.id)
        else:
            del collection[record.id]

        logger.debug("Deleted %s %s", type(record).__name__, record.id)

    def _delete_task(self, task: ProjectTask) -> None:
        """Remove a task and its subtasks, detaching it from its parent."""
        tasks = self._collections[ProjectTask]
        if tasks.pop(task.id, None) is None:
            return
        for subtask in list(task.subtasks):
            self._delete_task(subtask)
        parent = tasks.get(task.parent_id) if task.parent_id else None
        if parent is not None:
            parent.subtasks = [s for s in parent.subtasks if s.id != task.id]

    def _link_to_parent(self, task: ProjectTask) -> None:
        """Attach a stored subtask to its parent's list."""
        if not task.parent_id:
            return
        parent = self._collections[ProjectTask].get(task.parent_id)
        if parent is not None and all(s.id != task.id for s in parent.subtasks):
            parent.subtasks.append(task)

    def _link_to_observation(self, component: RubricComponent) -> None:
        """Attach a stored component to its observation's list."""
        if not component.observation_id:
            return
        observation = self._collections[ClassroomWalkthrough].get(component.observation_id)
        if observation is not None and all(c.id != component.id for c in observation.components):
            observation.components.append(component)

    def _orphan_meeting_references(self, meeting_id: str) -> None:
        """Clear meeting_id on every record pointing at a deleted meeting."""
        for model in (ProjectTask, Decision, ClassroomWalkthrough):
            for record in self._collections[model].values():
                if record.meeting_id == meeting_id:
                    record.meeting_id = None

    # Read

    def get(self, model: Type[T], record_id: str) -> T:
        """Look up one record by id."""
        try:
            return self._collection(model)[record_id]
        except KeyError:
            raise EntityNotFoundError(f"{model.__name__} {record_id} not found") from None

    def fetch(
        self,
        model: Type[T],
        predicate: Optional[Callable[[T], bool]] = None,
        sort_by: Sequence[SortDescriptor] = (),
        limit: Optional[int] = None,
    ) -> List[T]:
        """Return matching records, sorted, truncated to limit."""
        records = list(self._collection(model).values())

        if predicate is not None:
            try:
                records = [r for r in records if predicate(r)]
            except Exception as e:
                raise QueryError(f"Predicate failed on {model.__name__}: {e}") from e

        # Stable sorts applied from the least significant key up
        for descriptor in reversed(list(sort_by)):
            try:
                records.sort(key=attrgetter(descriptor.attribute), reverse=descriptor.reverse)
            except (AttributeError, TypeError) as e:
                raise QueryError(f"Cannot sort {model.__name__} by {descriptor.attribute}: {e}") from e

        if limit is not None:
            if limit < 0:
                raise QueryError(f"Fetch limit must be non-negative, got {limit}")
            records = records[:limit]

        return records

    def count(self, model: type, predicate: Optional[Callable[[Any], bool]] = None) -> int:
        """Count records matching predicate."""
        return len(self.fetch(model, predicate))

    def all(self, model: Type[T]) -> List[T]:
        """Every record of a type, in insertion order."""
        return list(self._collection(model).values())

    # Back-references

    def tasks_for_meeting(self, meeting: Meeting) -> List[ProjectTask]:
        """Follow-up tasks created from a meeting."""
        return self.fetch(ProjectTask, lambda t: t.meeting_id == meeting.id)

    def decisions_for_meeting(self, meeting: Meeting) -> List[Decision]:
        """Decisions made in a meeting."""
        return self.fetch(Decision, lambda d: d.meeting_id == meeting.id)

    def observations_for_meeting(self, meeting: Meeting) -> List[ClassroomWalkthrough]:
        """Observations discussed in a meeting."""
        return self.fetch(ClassroomWalkthrough, lambda o: o.meeting_id == meeting.id)

    def tasks_in_category(self, category: Category) -> List[ProjectTask]:
        """Tasks filed under a category."""
        return self.fetch(ProjectTask, lambda t: t.category_id == category.id)

    # Persistence

    def to_dict(self) -> Dict[str, Any]:
        """Convert the whole store to a JSON-safe snapshot."""
        observations = self.all(ClassroomWalkthrough)
        return {
            'version': SNAPSHOT_VERSION,
            'categories': [c.to_dict() for c in self.all(Category)],
            'tasks': [t.to_dict() for t in self.all(ProjectTask)],
            'meetings': [m.to_dict() for m in self.all(Meeting)],
            'decisions': [d.to_dict() for d in self.all(Decision)],
            'observations': [o.to_dict() for o in observations],
            # Components not attached to a stored observation
            'components': [
                c.to_dict() for c in self.all(RubricComponent)
                if c.observation_id not in self._collections[ClassroomWalkthrough]
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EntityStore':
        """Rebuild a store from to_dict() output, re-linking owned children."""
        store = cls()

        for item in data.get('categories', []):
            store.insert(Category.from_dict(item))

        task_data = data.get('tasks', [])
        tasks = {item['id']: ProjectTask.from_dict(item) for item in task_data}
        for item in task_data:
            tasks[item['id']].subtasks = [
                tasks[subtask_id] for subtask_id in item.get('subtask_ids', []) if subtask_id in tasks
            ]
        # Kept in saved order; insert() would re-append subtasks
        store._collections[ProjectTask].update(tasks)

        for item in data.get('meetings', []):
            store.insert(Meeting.from_dict(item))
        for item in data.get('decisions', []):
            store.insert(Decision.from_dict(item))
        for item in data.get('observations', []):
            store.insert(ClassroomWalkthrough.from_dict(item))
        for item in data.get('components', []):
            store.insert(RubricComponent.from_dict(item))

        return store

    def save(self, path: str) -> Path:
        """Write the snapshot as JSON, replacing the file atomically."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_suffix(target.suffix + ".tmp")
        try:
            with open(tmp, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=2)
            tmp.replace(target)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
        logger.info("Saved store snapshot to %s", target)
        return target

    @classmethod
    def load(cls, path: str) -> 'EntityStore':
        """Load a snapshot written by save()."""
        source = Path(path)
        if not source.exists():
            raise StoreLoadError(f"Store file not found: {source}")
        try:
            with open(source, 'r', encoding='utf-8') as f:
                data = json.load(f)
            store = cls.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Failed to load store from %s: %s", source, e)
            raise StoreLoadError(f"Cannot read store file {source}: {e}") from e
        logger.info("Loaded store snapshot from %s", source)
        return store

    def extend(self, records: Iterable[Any]) -> None:
        """Insert several records."""
        for record in records:
            self.insert(record)
