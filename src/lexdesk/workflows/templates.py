"""
Template workflows: create, edit and use document templates.

Template variables are the {{name}} placeholders of the content; they are
extracted again on every save so the variable list always matches the text.
"""

from ..commands import names
from ..core.models import DocumentTemplate
from ..core.template_engine import extract_variables, render_template
from ..infrastructure.paths import sanitize_filename
from ..ui.presenter import DialogAction, FormField
from .base import CANCEL, SAVE, Workflow
from .forms import collect, initial_record


def template_fields(template: DocumentTemplate) -> list[FormField]:
    return [
        FormField('name', "Name", template.name),
        FormField('category', "Category", template.category),
        FormField('is_public', "Public", template.is_public, kind='bool'),
        FormField('content', "Content ({{variable}} placeholders)", template.content, multiline=True),
    ]


def template_data(fields: list[FormField], values: dict) -> dict:
    data = collect(fields, values)
    data['variables'] = extract_variables(data['content'])
    return data


def template_variables(template: DocumentTemplate) -> list[str]:
    """Get the declared variables followed by any other placeholder in the content."""
    variables = list(template.variables)
    for name in extract_variables(template.content):
        if name not in variables:
            variables.append(name)
    return variables


class TemplateWorkflow(Workflow):
    """Handlers for managing and using document templates."""

    def handlers(self):
        return {
            names.CREATE_TEMPLATE: self.create,
            names.EDIT_TEMPLATE: self.edit,
            names.USE_TEMPLATE: self.use,
        }

    def create(self, payload: dict) -> None:
        fields = template_fields(initial_record(DocumentTemplate, payload.get('data')))

        def save(values):
            data = {**template_data(fields, values), 'created_by': self.store.current_user}
            if self.guarded(lambda: self.store.add_template(data)):
                self.notify("Template created", f"The template \"{data['name']}\" was created.")

        self.present("New template", "", [DialogAction(SAVE, save, variant='primary'), DialogAction(CANCEL)], fields)

    def edit(self, payload: dict) -> None:
        template_id = payload.get('templateId')
        template = self.store.get_template(template_id) if template_id else None
        if template is None:
            self.notify("Not found", f"No template with id {template_id!r}.")
            return
        fields = template_fields(template)

        def save(values):
            if self.guarded(lambda: self.store.update_template(template_id, template_data(fields, values))):
                self.notify("Template updated", "The template was updated.")

        self.present("Edit template", "", [DialogAction(SAVE, save, variant='primary'), DialogAction(CANCEL)], fields)

    def use(self, payload: dict) -> None:
        """
        Count a use of a template and ask for its variable values.

        The usage count is incremented when the form opens, whether or not a
        document is generated.
        """
        template_id = payload.get('templateId')
        template = self.store.use_template(template_id) if template_id else None
        if template is None:
            self.notify("Not found", f"No template with id {template_id!r}.")
            return

        variables = template_variables(template)
        fields = [FormField(name, name) for name in variables]

        def generate(values):
            document = render_template(template.content, collect(fields, values))
            self.deliver(document, f"{sanitize_filename(template.name)}.txt")

        body = f"## {template.name}\n\n" + (
            f"Fill in the {len(variables)} variable(s) to generate the document."
            if variables else "This template has no variables."
        )
        self.present(f"Use template: {template.name}", body, [
            DialogAction("Generate", generate, variant='primary'),
            DialogAction(CANCEL),
        ], fields)
