from storage.task_store import TaskStore

# Shared task list for the caregiver dashboard
task_store = TaskStore()
