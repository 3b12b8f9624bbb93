"""Procedure workflows: view, create and edit."""

from ..commands import names
from ..core.models import PROCEDURE_DIFFICULTIES, PROCEDURE_STATUSES, Procedure
from ..ui.presenter import DialogAction, FormField
from .base import CANCEL, CLOSE, SAVE, Workflow
from .formatting import bullet_list, properties
from .forms import collect, format_steps, initial_record, join_list, parse_steps
from .placeholders import resolve_procedure


def procedure_fields(procedure: Procedure) -> list[FormField]:
    return [
        FormField('title', "Title", procedure.title),
        FormField('description', "Description", procedure.description, multiline=True),
        FormField('category', "Category", procedure.category),
        FormField('difficulty', "Difficulty", procedure.difficulty, choices=list(PROCEDURE_DIFFICULTIES)),
        FormField('estimated_time', "Estimated time", procedure.estimated_time),
        FormField('status', "Status", procedure.status, choices=list(PROCEDURE_STATUSES)),
        FormField('required_documents', "Required documents (comma-separated)",
                  join_list(procedure.required_documents), kind='list'),
        FormField('steps', "Steps (one per line: title | description | optional)",
                  format_steps(procedure.steps), multiline=True),
    ]


def procedure_data(fields: list[FormField], values: dict) -> dict:
    data = collect(fields, values)
    data['steps'] = parse_steps(data['steps'])
    return data


def procedure_body(procedure: Procedure) -> str:
    """Build the Markdown body of the procedure viewer."""
    details = properties([
        ("Difficulty", procedure.difficulty),
        ("Duration", procedure.estimated_time),
        ("Status", procedure.status),
        ("Category", procedure.category),
    ])

    steps = []
    for index, step in enumerate(procedure.ordered_steps(), start=1):
        heading = f"**Step {index}: {step.title or f'Step {index}'}**"
        if not step.is_required:
            heading += " (optional)"
        lines = [heading, "", step.description or "No description."]
        if step.documents:
            lines += ["", f"*Documents:* {join_list(step.documents)}"]
        steps.append("\n".join(lines))

    steps_text = "\n\n".join(steps) if steps else "No steps defined."
    documents = bullet_list(procedure.required_documents, "No specific document required")
    return (
        f"## {procedure.title}\n\n{procedure.description}\n\n{details}\n\n"
        f"### Steps\n\n{steps_text}\n\n"
        f"### Required documents\n\n{documents}\n"
    )


class ProcedureWorkflow(Workflow):
    """Handlers for viewing and editing procedures."""

    def handlers(self):
        return {
            names.VIEW_PROCEDURE: self.view,
            names.ADD_PROCEDURE: self.add,
            names.EDIT_PROCEDURE: self.edit,
        }

    def view(self, payload: dict) -> None:
        """Show a procedure, or a placeholder if the id is unknown."""
        procedure = resolve_procedure(self.store, payload.get('procedureId'), payload.get('title'))

        self.present("Administrative procedure", procedure_body(procedure), [
            DialogAction("Add to favorites", lambda values: self.dispatch(
                names.ADD_TO_FAVORITES,
                {'itemType': 'procedure', 'itemId': procedure.id, 'itemName': procedure.title}), variant='primary'),
            DialogAction("Download guide", lambda values: self.dispatch(
                names.DOWNLOAD_RESOURCE, {'resourceName': procedure.title, 'resourceType': 'procedure'})),
            DialogAction(CLOSE),
        ])

    def add(self, payload: dict) -> None:
        fields = procedure_fields(initial_record(Procedure, payload.get('data')))

        def save(values):
            if self.guarded(lambda: self.store.add_procedure(procedure_data(fields, values))):
                self.notify("Procedure created", "The new procedure was created.")

        self.present("New procedure", "", [DialogAction(SAVE, save, variant='primary'), DialogAction(CANCEL)], fields)

    def edit(self, payload: dict) -> None:
        procedure_id = payload.get('procedureId')
        procedure = self.store.get_procedure(procedure_id) if procedure_id else None
        if procedure is None:
            self.notify("Not found", f"No procedure with id {procedure_id!r}.")
            return
        fields = procedure_fields(procedure)

        def save(values):
            if self.guarded(lambda: self.store.update_procedure(procedure_id, procedure_data(fields, values))):
                self.notify("Procedure updated", "The procedure was updated.")

        self.present("Edit procedure", "", [DialogAction(SAVE, save, variant='primary'), DialogAction(CANCEL)], fields)
