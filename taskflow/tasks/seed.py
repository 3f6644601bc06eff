"""Example tasks given to a user the first time they sign in."""

from datetime import datetime, timedelta
from typing import Optional

from .models import Priority, Status, Subtask, Task


def initial_tasks(now: Optional[datetime] = None) -> list[Task]:
    """Return the seed task set with due dates relative to ``now``."""
    now = now or datetime.now()
    return [
        Task(
            id="task-1",
            title="Design the new landing page",
            description="Create a modern and responsive design for the new landing page, focusing on user engagement and conversion.",
            status=Status.TODO,
            priority=Priority.HIGH,
            due_date=now + timedelta(days=7),
            subtasks=[
                Subtask(id="sub-1-1", text="Define color palette", completed=True),
                Subtask(id="sub-1-2", text="Create wireframes", completed=True),
                Subtask(id="sub-1-3", text="Design hero section", completed=False),
            ],
            image_url="https://images.pexels.com/photos/285814/pexels-photo-285814.jpeg",
        ),
        Task(
            id="task-2",
            title="Develop user authentication",
            description="Implement secure user authentication using JWT and password hashing. Include sign-up, login, and logout functionality.",
            status=Status.IN_PROGRESS,
            priority=Priority.HIGH,
            image_url="https://images.pexels.com/photos/5380664/pexels-photo-5380664.jpeg",
        ),
        Task(
            id="task-3",
            title="Set up CI/CD pipeline",
            description="Configure a continuous integration and continuous deployment pipeline to automate testing and deployment.",
            status=Status.IN_PROGRESS,
            priority=Priority.MEDIUM,
        ),
        Task(
            id="task-4",
            title="Write documentation for the API",
            description="Create comprehensive documentation for all API endpoints, including request/response examples.",
            status=Status.DONE,
            priority=Priority.MEDIUM,
            due_date=now - timedelta(days=5),
        ),
        Task(
            id="task-5",
            title="Update footer with new links",
            description="Add the new social media links and privacy policy link to the website footer.",
            status=Status.TODO,
            priority=Priority.LOW,
        ),
    ]
