"""Sample data generator for demos, first launch and snapshot fallbacks."""

import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from ..engine.store import EntityStore
from ..models.decision import Decision, Effectiveness, ImpactLevel
from ..models.meeting import Meeting, MeetingStatus, MeetingType
from ..models.observation import (
    ClassroomWalkthrough,
    DanielsonDomain,
    DanielsonScore,
    GradeLevel,
    ObservationType,
    RubricComponent,
)
from ..models.task import Category, Priority, ProjectTask, TaskStatus, TaskType

TASK_TITLES = [
    "Fire Drill Documentation",
    "Regents Testing Proctor Schedule",
    "Annual Safety Training",
    "Attendance Audit",
    "IEP Compliance Review",
    "Visitor Log Review",
    "Emergency Contact Update",
    "Lunch Program Inspection",
    "Staff Certification Check",
    "Bus Evacuation Drill",
]
CATEGORY_TITLES = ["Safety", "Testing", "HR Policies", "Special Education"]
MEETING_TITLES = {
    MeetingType.ADMIN: "Admin Team Meeting",
    MeetingType.STAFF: "Staff Meeting",
    MeetingType.PARENT: "Parent Conference",
    MeetingType.STUDENT: "Student Support Meeting",
    MeetingType.PRE_OBSERVATION: "Pre-Observation Conference",
    MeetingType.POST_OBSERVATION: "Post-Observation Debrief",
}
ATTENDEES = [
    "Alice Johnson", "Bob Smith", "Carol Lee", "David Brown",
    "Eva Green", "Frank Ortiz", "Grace Kim", "Henry Patel",
]
DECISION_TITLES = [
    "Implement New Onboarding Process",
    "Switch to Digital Attendance",
    "Extend Library Hours",
    "Adopt Peer Observation Cycle",
    "Revise Late Work Policy",
    "Pilot Advisory Period",
]
TEACHERS = ["Ms. Anderson", "Mr. Lee", "Mrs. Garcia", "Mr. Thompson", "Ms. Rivera"]
SUBJECTS = ["Algebra II", "English 10", "Biology", "US History", "Chemistry"]
COMPONENTS = [
    (DanielsonDomain.PLANNING_PREPARATION, "1a", "Demonstrating Knowledge of Content and Pedagogy"),
    (DanielsonDomain.CLASSROOM_ENVIRONMENT, "2a", "Creating an Environment of Respect and Rapport"),
    (DanielsonDomain.CLASSROOM_ENVIRONMENT, "2d", "Managing Student Behavior"),
    (DanielsonDomain.INSTRUCTION, "3b", "Using Questioning and Discussion Techniques"),
    (DanielsonDomain.INSTRUCTION, "3c", "Engaging Students in Learning"),
    (DanielsonDomain.PROFESSIONAL_RESPONSIBILITIES, "4e", "Growing and Developing Professionally"),
]


class SampleDataGenerator:
    """Generates deterministic record sets relative to a start date."""

    def __init__(self, seed: int = 42, config: dict = None):
        """Initialize generator with seed for reproducibility."""
        self.seed = seed
        self.random = random.Random(seed)
        self.config = config or {}
        self.sample_config = self.config.get('samples', {})

    def generate_categories(self) -> List[Category]:
        """One category per fixed title."""
        return [Category(title=title) for title in CATEGORY_TITLES]

    def generate_tasks(
        self,
        count: int,
        start_date: datetime,
        categories: Optional[List[Category]] = None,
    ) -> List[ProjectTask]:
        """Generate top-level tasks, some past due, some with subtasks."""
        tasks = []

        for i in range(count):
            title = TASK_TITLES[i % len(TASK_TITLES)]
            if i >= len(TASK_TITLES):
                title = f"{title} ({i // len(TASK_TITLES) + 1})"

            # Due dates from a week ago to six weeks out
            due_date = start_date + timedelta(days=self.random.randint(-7, 45))
            created_date = start_date - timedelta(days=self.random.randint(0, 21))

            status = self.random.choice([
                TaskStatus.PENDING, TaskStatus.PENDING, TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED,
            ])
            completed_date = None
            if status == TaskStatus.COMPLETED:
                completed_date = created_date + timedelta(days=self.random.randint(0, 7))

            task = ProjectTask(
                title=title,
                due_date=due_date,
                detail=f"Sample {title.lower()} item.",
                created_date=created_date,
                completed_date=completed_date,
                status=status,
                priority=self.random.choice(list(Priority)),
                task_type=TaskType.COMPLIANCE if self.random.random() < 0.7 else TaskType.GENERAL,
                category_id=self.random.choice(categories).id if categories else None,
            )

            # Some tasks carry a checklist
            if self.random.random() < 0.3:
                for n in range(self.random.randint(1, 3)):
                    done = self.random.random() < 0.5
                    task.subtasks.append(ProjectTask(
                        title=f"Step {n + 1}",
                        due_date=due_date,
                        created_date=created_date,
                        status=TaskStatus.COMPLETED if done else TaskStatus.PENDING,
                        completed_date=created_date if done else None,
                        priority=task.priority,
                        task_type=task.task_type,
                        parent_id=task.id,
                        category_id=task.category_id,
                    ))

            tasks.append(task)

        return tasks

    def generate_meetings(self, count: int, start_date: datetime) -> List[Meeting]:
        """Generate meetings within two weeks either side of start_date."""
        meetings = []
        day_start = start_date.replace(hour=0, minute=0, second=0, microsecond=0)

        for _ in range(count):
            meeting_type = self.random.choice(list(MeetingType))
            start = day_start + timedelta(
                days=self.random.randint(-14, 14),
                hours=self.random.randint(8, 15),
            )
            end = start + timedelta(minutes=self.random.choice([30, 45, 60, 90]))
            if start < start_date:
                status = MeetingStatus.COMPLETED
            else:
                status = self.random.choice([MeetingStatus.SCHEDULED, MeetingStatus.SCHEDULED, MeetingStatus.RESCHEDULED])

            meetings.append(Meeting(
                title=MEETING_TITLES[meeting_type],
                date=start,
                start_time=start,
                end_time=end,
                attendees=self.random.sample(ATTENDEES, self.random.randint(2, 4)),
                status=status,
                meeting_type=meeting_type,
            ))

        return meetings

    def generate_decisions(
        self,
        count: int,
        start_date: datetime,
        meetings: Optional[List[Meeting]] = None,
    ) -> List[Decision]:
        """Generate decisions made in the weeks before start_date."""
        decisions = []

        for i in range(count):
            title = DECISION_TITLES[i % len(DECISION_TITLES)]
            effectiveness = self.random.choice(list(Effectiveness))
            meeting = self.random.choice(meetings) if meetings and self.random.random() < 0.6 else None

            decisions.append(Decision(
                title=title,
                detail=f"{title} across the building.",
                date_made=start_date - timedelta(days=self.random.randint(0, 40)),
                next_steps="Communicate to staff.",
                impact=self.random.choice(list(ImpactLevel)),
                rationale="Agreed by the leadership team.",
                effectiveness=effectiveness,
                reflection="Reviewed at the following meeting." if effectiveness != Effectiveness.PENDING else None,
                meeting_id=meeting.id if meeting else None,
            ))

        return decisions

    def generate_observations(self, count: int, start_date: datetime) -> List[ClassroomWalkthrough]:
        """Generate scored walkthroughs, some needing a follow-up."""
        observations = []

        for _ in range(count):
            scores = list(DanielsonScore)
            observation = ClassroomWalkthrough(
                teacher_name=self.random.choice(TEACHERS),
                date=start_date - timedelta(days=self.random.randint(0, 30)),
                subject=self.random.choice(SUBJECTS),
                grade_level=self.random.choice(list(GradeLevel)),
                observation_type=self.random.choice(list(ObservationType)),
                duration=self.random.choice([15, 20, 30, 45]),
                overall_rating=self.random.choice(scores),
            )
            if self.random.random() < 0.4:
                observation.follow_up_required = True
                observation.follow_up_date = start_date + timedelta(days=self.random.randint(-3, 14))

            for domain, number, detail in self.random.sample(COMPONENTS, self.random.randint(1, 3)):
                observation.components.append(RubricComponent(
                    domain=domain,
                    component_number=number,
                    detail=detail,
                    score=self.random.choice(scores),
                    observation_id=observation.id,
                ))

            observations.append(observation)

        return observations

    def generate_store(self, start_date: datetime) -> EntityStore:
        """Populate a fresh store with every record type, cross-linked."""
        task_count = self.sample_config.get('task_count', 12)
        meeting_count = self.sample_config.get('meeting_count', 8)
        decision_count = self.sample_config.get('decision_count', 6)
        observation_count = self.sample_config.get('observation_count', 4)

        categories = self.generate_categories()
        meetings = self.generate_meetings(meeting_count, start_date)
        tasks = self.generate_tasks(task_count, start_date, categories)
        decisions = self.generate_decisions(decision_count, start_date, meetings)
        observations = self.generate_observations(observation_count, start_date)

        # Follow-up tasks for some of the meetings
        for meeting in meetings:
            if tasks and self.random.random() < 0.3:
                self.random.choice(tasks).meeting_id = meeting.id

        store = EntityStore()
        store.extend(categories)
        store.extend(meetings)
        store.extend(tasks)
        store.extend(decisions)
        store.extend(observations)
        return store

    def counts(self, store: EntityStore) -> Dict[str, int]:
        """Record counts per type, for the seed summary."""
        return {
            'categories': store.count(Category),
            'tasks': store.count(ProjectTask),
            'meetings': store.count(Meeting),
            'decisions': store.count(Decision),
            'observations': store.count(ClassroomWalkthrough),
        }


def sample_meetings(now: Optional[datetime] = None) -> List[Meeting]:
    """Fixed meetings shown when no real data can be read."""
    now = now or datetime.now()
    return [
        Meeting(
            title="Admin Team Meeting",
            date=now - timedelta(days=7),
            attendees=["Alice Johnson", "Bob Smith"],
            meeting_type=MeetingType.ADMIN,
            status=MeetingStatus.COMPLETED,
            notes="Discuss upcoming school year goals.",
        ),
        Meeting(
            title="Staff Meeting",
            date=now - timedelta(days=3),
            attendees=["Carol Lee", "David Brown", "Eva Green"],
            meeting_type=MeetingType.STAFF,
            status=MeetingStatus.COMPLETED,
        ),
    ]


# Effective, ineffective and pending counts shown when no real data can be read
SAMPLE_DECISION_COUNTS = (12, 3, 5)


def sample_pending_decisions(now: Optional[datetime] = None) -> List[Decision]:
    """Fixed decision awaiting review, shown when no real data can be read."""
    return [
        Decision(
            title="Implement New Policy",
            date_made=now or datetime.now(),
            impact=ImpactLevel.HIGH,
            rationale="Improve efficiency",
        ),
    ]
