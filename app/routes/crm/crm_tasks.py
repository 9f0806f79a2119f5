import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.dependencies.storage import get_storage
from app.schemas.task import TaskCreate, TaskOut, TaskStatus, TaskUpdate, TaskView
from app.services.queries import client_name, is_task_overdue
from app.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


def present_tasks(tasks: List[TaskOut], storage: Storage) -> List[TaskView]:
    """Attaches the derived overdue flag and the (possibly dangling) client's name."""
    now = storage.now()
    clients = storage.clients_by_id()
    return [
        TaskView(
            **task.model_dump(),
            is_overdue=is_task_overdue(task, now),
            client_name=client_name(clients, task.client_id),
        )
        for task in tasks
    ]


# -----------------------------
# 📤 List Tasks
# -----------------------------
@router.get("/tasks", response_model=List[TaskView])
def get_tasks(
    client_id: Optional[int] = Query(None, alias="clientId"),
    task_status: Optional[TaskStatus] = Query(None, alias="status"),
    storage: Storage = Depends(get_storage),
):
    if client_id is not None:
        tasks = storage.get_tasks_by_client(client_id)
    elif task_status:
        tasks = storage.get_tasks_by_status(task_status)
    else:
        tasks = storage.get_all_tasks()
    return present_tasks(tasks, storage)


@router.get("/tasks/overdue", response_model=List[TaskView])
def get_overdue_tasks(storage: Storage = Depends(get_storage)):
    return present_tasks(storage.get_overdue_tasks(), storage)


@router.get("/tasks/{task_id}", response_model=TaskView)
def get_task(task_id: int, storage: Storage = Depends(get_storage)):
    task = storage.get_task(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return present_tasks([task], storage)[0]


# -----------------------------
# 📥 Create Task
# -----------------------------
@router.post("/tasks", response_model=TaskView, status_code=status.HTTP_201_CREATED)
def create_task(task: TaskCreate, storage: Storage = Depends(get_storage)):
    return present_tasks([storage.create_task(task)], storage)[0]


# -----------------------------
# ✏️ Update Task (status changes included)
# -----------------------------
@router.patch("/tasks/{task_id}", response_model=TaskView)
def update_task(task_id: int, task: TaskUpdate, storage: Storage = Depends(get_storage)):
    updated = storage.update_task(task_id, task)
    if not updated:
        logger.warning(f"⚠️ Update for unknown task {task_id}")
        raise HTTPException(status_code=404, detail="Task not found")
    return present_tasks([updated], storage)[0]


# -----------------------------
# 🗑️ Delete Task
# -----------------------------
@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_task(task_id):
        logger.warning(f"⚠️ Delete for unknown task {task_id}")
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
