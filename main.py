"""Main entry point for the PulseHub command line."""

import argparse
import json
import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path

from pulsehub.analytics.dashboard import build_dashboard
from pulsehub.analytics.grouping import grouped_meetings, grouped_tasks
from pulsehub.analytics.search import SearchCategory, SortOrder, search
from pulsehub.analytics.stats import effectiveness_stats, status_counts
from pulsehub.engine.exceptions import StoreLoadError
from pulsehub.engine.store import EntityStore
from pulsehub.filters import DecisionFilter, MeetingFilter, TaskFilter
from pulsehub.models import (
    Decision,
    Effectiveness,
    ImpactLevel,
    Meeting,
    MeetingStatus,
    MeetingType,
    Priority,
    ProjectTask,
    TaskStatus,
    TaskType,
    TimeRange,
)
from pulsehub.seed.generator import SampleDataGenerator
from pulsehub.utils.config import get_default_config, load_config

logger = logging.getLogger("pulsehub")


def enum_arg(enum_cls):
    """argparse type accepting a member name or label, e.g. ``in-progress``."""
    def convert(text: str):
        key = text.strip().lower().replace("-", "_").replace(" ", "_")
        for member in enum_cls:
            if key in (member.name.lower(), member.value.lower().replace("-", "_").replace(" ", "_")):
                return member
        choices = ", ".join(m.name.lower().replace("_", "-") for m in enum_cls)
        raise argparse.ArgumentTypeError(f"invalid choice {text!r} (choose from {choices})")
    convert.__name__ = enum_cls.__name__
    return convert


def resolve_config(config_path: str) -> dict:
    """Load the config file if present, else the defaults."""
    return load_config(config_path) if Path(config_path).exists() else get_default_config()


def open_store(path: str) -> EntityStore:
    """Load the store; the app cannot run without it."""
    try:
        return EntityStore.load(path)
    except StoreLoadError as e:
        logger.error("%s", e)
        print(f"Cannot open store: {e}\nRun 'seed' first to create one.", file=sys.stderr)
        sys.exit(1)


def run_seed(config: dict, store_path: str, seed: int):
    """Generate sample records and write them to the store file."""
    generator = SampleDataGenerator(seed=seed, config=config)
    now = datetime.now().replace(second=0, microsecond=0)
    store = generator.generate_store(now)
    store.save(store_path)

    print(f"\nSeeded store at {store_path}")
    for name, count in generator.counts(store).items():
        print(f"  {name}: {count}")
    return store


def run_dashboard(config: dict, store_path: str, time_range: TimeRange, as_json: bool):
    """Print the dashboard summary."""
    store = open_store(store_path)
    summary = build_dashboard(store, time_range, datetime.now(), config)
    if as_json:
        print(json.dumps(summary.to_dict(), indent=2, default=str))
    else:
        print(summary.to_human_readable())
    return summary


def run_tasks(config: dict, store_path: str, task_filter: TaskFilter, as_json: bool):
    """Print top-level tasks grouped by due date."""
    store = open_store(store_path)
    now = datetime.now()
    # Subtasks show under their parent, not as their own rows
    tasks = store.fetch(ProjectTask, lambda t: t.parent_id is None)
    groups = grouped_tasks(tasks, task_filter, now, config)

    if as_json:
        print(json.dumps(
            {label: [t.to_dict() for t in members] for label, members in groups},
            indent=2,
        ))
        return groups

    counts = status_counts(tasks, now)
    print(f"Pending: {counts.pending}  In progress: {counts.in_progress}  "
          f"Completed: {counts.completed}  Overdue: {counts.overdue}")
    for label, members in groups:
        print(f"\n{label}")
        for task in members:
            remaining = f" ({task.remaining_task_count} steps left)" if task.subtasks else ""
            print(f"  [{task.priority.value:<8}] {task.title} - {task.due_text(now)}{remaining}")
    return groups


def run_meetings(config: dict, store_path: str, meeting_filter: MeetingFilter, as_json: bool):
    """Print meetings grouped by date."""
    store = open_store(store_path)
    groups = grouped_meetings(store.all(Meeting), meeting_filter, datetime.now(), config)

    if as_json:
        print(json.dumps(
            {label: [m.to_dict() for m in members] for label, members in groups},
            indent=2,
        ))
        return groups

    for label, members in groups:
        print(f"\n{label}")
        for meeting in members:
            print(f"  {meeting.date:%a %d %b %H:%M}  {meeting.title} "
                  f"({meeting.meeting_type.value}, {meeting.formatted_duration})")
    return groups


def run_decisions(config: dict, store_path: str, decision_filter: DecisionFilter, as_json: bool):
    """Print decisions, newest first, with effectiveness counts."""
    store = open_store(store_path)
    decisions = decision_filter.apply(store.all(Decision))

    if as_json:
        print(json.dumps([d.to_dict() for d in decisions], indent=2))
        return decisions

    stats = effectiveness_stats(decisions)
    print(f"Effective: {stats.effective}  Ineffective: {stats.ineffective}  Pending: {stats.pending}")
    for decision in sorted(decisions, key=lambda d: d.date_made, reverse=True):
        print(f"  {decision.date_made:%Y-%m-%d}  [{decision.impact.value:<8}] "
              f"{decision.title} ({decision.effectiveness.value})")
    return decisions


def run_search(store_path: str, query: str, category: SearchCategory, sort_order: SortOrder, as_json: bool):
    """Print search results per record type."""
    store = open_store(store_path)
    results = search(store, query, category, sort_order)

    if as_json:
        print(json.dumps({
            'tasks': [t.to_dict() for t in results.tasks],
            'meetings': [m.to_dict() for m in results.meetings],
            'decisions': [d.to_dict() for d in results.decisions],
            'observations': [o.to_dict() for o in results.observations],
        }, indent=2))
        return results

    if results.is_empty:
        print(f"No results for {query!r}")
        return results

    print(f"{results.total_count} result(s) for {query!r}")
    sections = [
        ("Tasks", [t.title for t in results.tasks]),
        ("Meetings", [m.title for m in results.meetings]),
        ("Decisions", [d.title for d in results.decisions]),
        ("Observations", [f"{o.teacher_name} - {o.subject}" for o in results.observations]),
    ]
    for heading, titles in sections:
        if titles:
            print(f"\n{heading}")
            for title in titles:
                print(f"  {title}")
    return results


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="PulseHub records for school administrators"
    )
    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '--store',
        type=str,
        default=None,
        help='Path to the store file (default: store.path from config)'
    )
    parser.add_argument('--json', action='store_true', help='Print JSON instead of text')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    seed_parser = subparsers.add_parser('seed', help='Write a sample data set to the store')
    seed_parser.add_argument('--seed', type=int, default=None, help='Random seed')

    dashboard_parser = subparsers.add_parser('dashboard', help='Show counts and trends')
    dashboard_parser.add_argument(
        '--time-range',
        type=enum_arg(TimeRange),
        default=None,
        help='day, week, month or year (default: dashboard.time_range from config)'
    )

    tasks_parser = subparsers.add_parser('tasks', help='List tasks grouped by due date')
    tasks_parser.add_argument('--search', default="", help='Text to match in title or detail')
    tasks_parser.add_argument('--status', type=enum_arg(TaskStatus), default=None)
    tasks_parser.add_argument('--priority', type=enum_arg(Priority), default=None)
    tasks_parser.add_argument('--type', dest='task_type', type=enum_arg(TaskType), default=None)

    meetings_parser = subparsers.add_parser('meetings', help='List meetings grouped by date')
    meetings_parser.add_argument('--search', default="", help='Text to match in title or attendees')
    meetings_parser.add_argument('--status', type=enum_arg(MeetingStatus), default=None)
    meetings_parser.add_argument('--type', dest='meeting_type', type=enum_arg(MeetingType), default=None)

    decisions_parser = subparsers.add_parser('decisions', help='List decisions')
    decisions_parser.add_argument('--search', default="", help='Text to match in title, detail or rationale')
    decisions_parser.add_argument('--effectiveness', type=enum_arg(Effectiveness), default=None)
    decisions_parser.add_argument('--impact', type=enum_arg(ImpactLevel), default=None)

    search_parser = subparsers.add_parser('search', help='Search every record type')
    search_parser.add_argument('query')
    search_parser.add_argument('--category', type=enum_arg(SearchCategory), default=SearchCategory.ALL)
    search_parser.add_argument('--sort', type=enum_arg(SortOrder), default=SortOrder.RELEVANCE)

    args = parser.parse_args()

    config = resolve_config(args.config)
    level = 'DEBUG' if args.verbose else config.get('logging', {}).get('level', 'INFO')
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store_path = args.store or config.get('store', {}).get('path', 'data/pulsehub.json')

    if args.command == 'seed':
        seed = args.seed if args.seed is not None else config.get('samples', {}).get('seed', 42)
        run_seed(config, store_path, seed)
    elif args.command == 'dashboard':
        time_range = args.time_range or TimeRange.from_name(
            config.get('dashboard', {}).get('time_range', 'week')
        )
        run_dashboard(config, store_path, time_range, args.json)
    elif args.command == 'tasks':
        task_filter = TaskFilter(
            search_text=args.search,
            status=args.status,
            priority=args.priority,
            task_type=args.task_type,
        )
        run_tasks(config, store_path, task_filter, args.json)
    elif args.command == 'meetings':
        meeting_filter = MeetingFilter(
            search_text=args.search,
            status=args.status,
            meeting_type=args.meeting_type,
        )
        run_meetings(config, store_path, meeting_filter, args.json)
    elif args.command == 'decisions':
        decision_filter = DecisionFilter(
            search_text=args.search,
            effectiveness=args.effectiveness,
            impact=args.impact,
        )
        run_decisions(config, store_path, decision_filter, args.json)
    elif args.command == 'search':
        run_search(store_path, args.query, args.category, args.sort, args.json)


if __name__ == "__main__":
    main()
