# main.py
import argparse
import asyncio
import sys

from sqlalchemy.exc import SQLAlchemyError

from logger import logger
from database.operations import DatabaseTaskSource, get_schedule_tasks, init_db
from planning.exceptions import ScheduleAnalyticsError
from planning.report import build_report
from utils.export import SUPPORTED_FORMATS, export_report, export_tasks


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Schedule analytics: metrics, timeline, critical path, workload")
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init-db', help="Create the database tables")

    report_parser = subparsers.add_parser('report', help="Print the composite report of a schedule as JSON")
    report_parser.add_argument('schedule_id', type=int)
    report_parser.add_argument('--threshold', type=float, default=None,
                               help="Overload threshold in estimated hours")

    export_parser = subparsers.add_parser('export', help="Export the tasks of a schedule")
    export_parser.add_argument('schedule_id', type=int)
    export_parser.add_argument('--format', dest='fmt', choices=SUPPORTED_FORMATS, default='json')
    export_parser.add_argument('--output', default=None, help="Output file (stdout when omitted)")

    return parser.parse_args(argv)


def main(argv=None):
    """Entry point of the command line."""
    args = parse_args(argv)

    try:
        if args.command == 'init-db':
            init_db()
            return 0

        if args.command == 'report':
            report = asyncio.run(build_report(args.schedule_id, DatabaseTaskSource(), args.threshold))
            print(export_report(report))
            return 0

        content = export_tasks(get_schedule_tasks(args.schedule_id), args.fmt)
        if args.output:
            with open(args.output, 'w', encoding='utf-8', newline='') as f:
                f.write(content)
            logger.info(f"Export written to {args.output}")
        else:
            sys.stdout.write(content)
        return 0

    except (ScheduleAnalyticsError, ValueError, SQLAlchemyError) as e:
        logger.error(f"Command {args.command} failed: {str(e)}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
