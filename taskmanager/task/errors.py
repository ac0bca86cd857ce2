# taskmanager/task/errors.py


class TaskError(Exception):
    pass


class TaskValidationError(TaskError):
    pass


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class TaskStorageError(TaskError):
    pass
