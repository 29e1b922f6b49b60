"""Tasks available to forge commands."""

from forge_cli.tasks.base import Task, run_sequence
from forge_cli.tasks.create_directory import CreateAndStepIntoDirectoryTask
from forge_cli.tasks.install_blueprint import InstallBlueprintTask
from forge_cli.tasks.test import TestTask
from forge_cli.tasks.test_server import CoordinatorState, TestServerTask

DEFAULT_TASKS: dict[str, type[Task]] = {
    "create_and_step_into_directory": CreateAndStepIntoDirectoryTask,
    "install_blueprint": InstallBlueprintTask,
    "test": TestTask,
    "test_server": TestServerTask,
}

__all__ = [
    "DEFAULT_TASKS",
    "CoordinatorState",
    "CreateAndStepIntoDirectoryTask",
    "InstallBlueprintTask",
    "Task",
    "TestServerTask",
    "TestTask",
    "run_sequence",
]
