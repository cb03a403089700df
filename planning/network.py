# planning/network.py
"""
Dependency network of a schedule and its critical path
"""
from logger import logger
from planning.exceptions import CyclicDependencyError
from planning.models import CriticalPath, TaskGraph

ON_PATH = 1
DONE = 2


def find_critical_path(tasks):
    """
    Finds the critical path of a schedule.

    The critical path is the dependency-respecting chain of tasks with the
    largest sum of estimated hours, from a task without prerequisites down
    to a task without dependents.

    Args:
        tasks: TaskGraph or list of tasks with their dependencies

    Returns:
        CriticalPath

    Raises:
        CyclicDependencyError: if dependencies form a cycle
    """
    graph = TaskGraph.of(tasks)

    if not graph.tasks:
        logger.warning("No tasks to calculate the critical path for")
        return CriticalPath()

    successors = create_dependency_graph(graph)

    # Rejects cycles anywhere in the graph, including parts not reachable from a root
    order = topological_sort(graph, successors)

    longest, next_on_path = calculate_longest_paths(graph, successors, order)

    best_root = None
    for root_id in find_root_tasks(graph):
        if best_root is None or longest[root_id] > longest[best_root]:
            best_root = root_id

    path_ids = []
    task_id = best_root
    while task_id is not None:
        path_ids.append(task_id)
        task_id = next_on_path[task_id]

    critical_path = CriticalPath(
        path_ids=path_ids,
        path_tasks=[graph.tasks_by_id[task_id] for task_id in path_ids],
        total_duration=longest[best_root]
    )

    logger.info(f"Critical path: {[task.name for task in critical_path.path_tasks]}, "
                f"{critical_path.total_duration} hours")
    return critical_path


def create_dependency_graph(graph):
    """
    Builds the adjacency list of the dependency network.

    Args:
        graph: TaskGraph

    Returns:
        Dict task id -> list of dependent task ids (edge prerequisite -> dependent)
    """
    successors = {task.id: [] for task in graph.tasks}

    for task in graph.tasks:
        for predecessor_id in graph.dependencies_of(task):
            successors[predecessor_id].append(task.id)

    logger.debug(f"Dependency graph: {sum(len(ids) for ids in successors.values())} edges "
                 f"between {len(successors)} tasks")
    return successors


def topological_sort(graph, successors):
    """
    Orders task ids so that every prerequisite comes before its dependents.

    Depth-first walk with an explicit stack; a task met again while it is
    still on the current path closes a cycle.

    Args:
        graph: TaskGraph
        successors: Adjacency list from create_dependency_graph

    Returns:
        List of task ids in topological order

    Raises:
        CyclicDependencyError: with the ids of the tasks forming the cycle
    """
    state = {}
    finished = []

    for task in graph.tasks:
        if task.id in state:
            continue

        state[task.id] = ON_PATH
        path = [task.id]
        pending = [iter(successors[task.id])]

        while pending:
            successor_id = next(pending[-1], None)

            if successor_id is None:
                done_id = path.pop()
                pending.pop()
                state[done_id] = DONE
                finished.append(done_id)
                continue

            if state.get(successor_id) == ON_PATH:
                cycle = path[path.index(successor_id):] + [successor_id]
                names = [graph.tasks_by_id[t_id].name for t_id in cycle]
                logger.error(f"Cyclic dependency detected: {' -> '.join(names)}")
                raise CyclicDependencyError(cycle, names)

            if successor_id not in state:
                state[successor_id] = ON_PATH
                path.append(successor_id)
                pending.append(iter(successors[successor_id]))

    finished.reverse()
    return finished


def calculate_longest_paths(graph, successors, order):
    """
    Longest chain of estimated hours starting at every task.

    Tasks are visited in reverse topological order, so all dependents of a
    task are settled before the task itself. On equal hours the first
    dependent in task order is kept.

    Returns:
        Tuple (dict id -> hours of the longest chain from it,
               dict id -> next id on that chain or None)
    """
    longest = {}
    next_on_path = {}

    for task_id in reversed(order):
        best_successor = None
        for successor_id in successors[task_id]:
            if best_successor is None or longest[successor_id] > longest[best_successor]:
                best_successor = successor_id

        hours = graph.tasks_by_id[task_id].estimated_hours
        longest[task_id] = hours + (longest[best_successor] if best_successor is not None else 0)
        next_on_path[task_id] = best_successor

    return longest, next_on_path


def find_root_tasks(graph):
    """Ids of tasks without prerequisites inside the graph, in task order."""
    return [task.id for task in graph.tasks if not graph.dependencies_of(task)]
