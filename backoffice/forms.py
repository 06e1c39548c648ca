from __future__ import annotations

from django import forms


def _bs(field_or_bf, *, sel: bool = False, chk: bool = False) -> None:
    """
    Apply correct Bootstrap 5 classes:
      - text inputs / textareas / file inputs: form-control
      - selects: form-select
      - checkboxes and radios: form-check-input
    Also remove any conflicting class that would break rendering.
    """
    field = getattr(field_or_bf, "field", field_or_bf)  # BoundField -> Field
    widget = field.widget
    classes = set(widget.attrs.get("class", "").split())

    classes.discard("form-control")
    classes.discard("form-select")
    classes.discard("form-check-input")

    if chk:
        classes.add("form-check-input")
    elif sel:
        classes.add("form-select")
    else:
        classes.add("form-control")

    widget.attrs["class"] = " ".join(sorted(c for c in classes if c))


def bootstrap_fields(form: forms.BaseForm) -> None:
    for bf in form.visible_fields():
        widget = bf.field.widget
        _bs(
            bf,
            sel=isinstance(widget, (forms.Select, forms.SelectMultiple))
            and not isinstance(widget, (forms.RadioSelect, forms.CheckboxSelectMultiple)),
            chk=isinstance(widget, (forms.CheckboxInput, forms.RadioSelect, forms.CheckboxSelectMultiple)),
        )
