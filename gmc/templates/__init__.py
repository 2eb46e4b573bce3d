from gmc.templates.deploy import CreatedEntry, deploy_template_set
from gmc.templates.registry import (
    DEFAULT_TEMPLATE_SET,
    TemplateEntry,
    TemplateSet,
    TemplateSetSpec,
    load_template_set,
    optional_template_sets,
    template_set_spec,
)

__all__ = [
    "DEFAULT_TEMPLATE_SET",
    "CreatedEntry",
    "TemplateEntry",
    "TemplateSet",
    "TemplateSetSpec",
    "deploy_template_set",
    "load_template_set",
    "optional_template_sets",
    "template_set_spec",
]
