"""
Export of schedule tasks and reports to JSON and CSV
"""
import csv
import io
import json

from logger import logger
from planning.exceptions import UnsupportedExportFormatError
from planning.models import TaskGraph

CSV_HEADER = ("ID,Nombre,Estado,Prioridad,Progreso (%),Fecha Inicio,Fecha Fin,"
              "Horas Estimadas,Horas Reales,Asignado,Descripción")

SUPPORTED_FORMATS = ("json", "csv")


def export_tasks(tasks, fmt):
    """
    Serializes the task list of a schedule.

    Args:
        tasks: TaskGraph or list of tasks
        fmt: "json" or "csv"

    Returns:
        str with the exported content

    Raises:
        UnsupportedExportFormatError: for any other format
    """
    normalized = fmt.lower() if isinstance(fmt, str) else fmt
    if normalized not in SUPPORTED_FORMATS:
        logger.error(f"Unsupported export format requested: {fmt!r}")
        raise UnsupportedExportFormatError(fmt, SUPPORTED_FORMATS)

    task_list = list(tasks.tasks if isinstance(tasks, TaskGraph) else tasks)
    logger.info(f"Exporting {len(task_list)} tasks as {normalized}")

    if normalized == "json":
        return json.dumps([task.to_dict() for task in task_list], indent=2, ensure_ascii=False)

    # Text columns are quoted, numeric columns (int/float values) are written bare
    output = io.StringIO()
    output.write(CSV_HEADER + "\n")
    writer = csv.writer(output, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")

    for task in task_list:
        writer.writerow([
            str(task.id),
            task.name,
            task.state or "",
            task.priority.value,
            _number(task.progress),
            _format_date(task.start_date),
            _format_date(task.end_date),
            _number(task.estimated_hours),
            _number(task.actual_hours),
            task.assignee.name if task.assignee else "",
            task.description or "",
        ])

    return output.getvalue()


def export_report(report):
    """Pretty-printed JSON of a ScheduleReport."""
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def _number(value):
    """Numeric cell: 0 when missing, integral values without a decimal part."""
    if value is None:
        return 0
    if float(value).is_integer():
        return int(value)
    return float(value)


def _format_date(value):
    return value.date().isoformat() if value else ""
