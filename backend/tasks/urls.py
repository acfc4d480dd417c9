from django.urls import path

from .views import TaskList, TaskDetail, TaskUpdate, TasksByPriority, TasksByCompletion

urlpatterns = [
    path('tasks', TaskList.as_view(), name='task-list'),
    path('tasks/priority/<str:level>', TasksByPriority.as_view(), name='tasks-by-priority'),
    path('tasks/completion/<str:status_value>', TasksByCompletion.as_view(), name='tasks-by-completion'),
    path('tasks/<str:task_id>', TaskDetail.as_view(), name='task-detail'),
    path('task/<str:task_id>', TaskUpdate.as_view(), name='task-update'),
]
