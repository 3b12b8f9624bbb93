"""
Workflow handlers bound to the command bus.

Example:
    context = WorkflowContext(store_provider=lambda: store, bus=bus, ...)
    subscriptions = register_workflows(context)
"""

from ..commands.bus import SubscriptionGroup
from .base import Workflow, WorkflowContext
from .data_transfer import DataTransferWorkflow
from .deletion import DeletionWorkflow
from .favorites import FavoritesWorkflow
from .legal_texts import LegalTextWorkflow
from .navigation import NavigationWorkflow
from .news import NewsWorkflow
from .procedures import ProcedureWorkflow
from .review import ReviewWorkflow
from .searches import SearchWorkflow
from .templates import TemplateWorkflow


WORKFLOW_CLASSES = (
    LegalTextWorkflow,
    ProcedureWorkflow,
    NewsWorkflow,
    SearchWorkflow,
    FavoritesWorkflow,
    TemplateWorkflow,
    DataTransferWorkflow,
    ReviewWorkflow,
    DeletionWorkflow,
    NavigationWorkflow,
)


def register_workflows(context: WorkflowContext) -> SubscriptionGroup:
    """
    Subscribe every workflow handler to the context's bus.

    Args:
        context: Collaborators shared by the handlers.

    Returns:
        Group holding all subscriptions.
    """
    group = SubscriptionGroup()
    for workflow_class in WORKFLOW_CLASSES:
        workflow_class(context).register(group)
    return group


__all__ = ['Workflow', 'WorkflowContext', 'WORKFLOW_CLASSES', 'register_workflows']
