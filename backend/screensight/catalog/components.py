"""Component catalog: the targets that generic elements are bound to."""

from __future__ import annotations

from screensight.models.mapping import A11yDefaults, CatalogComponent

_CATALOG: dict[str, CatalogComponent] = {
    "button": CatalogComponent(
        name="button",
        import_name="Button",
        class_name="usa-button",
        category="forms",
        props=["type", "onClick", "disabled", "className", "size", "variant"],
        variants={
            "primary": "usa-button",
            "secondary": "usa-button usa-button--secondary",
            "outline": "usa-button usa-button--outline",
            "big": "usa-button usa-button--big",
        },
        a11y=A11yDefaults(role="button"),
        description="Standard button component",
    ),
    "input": CatalogComponent(
        name="input",
        import_name="TextInput",
        class_name="usa-input",
        category="forms",
        props=["id", "name", "type", "value", "onChange", "className"],
        a11y=A11yDefaults(role="textbox"),
        description="Text input field",
    ),
    "textarea": CatalogComponent(
        name="textarea",
        import_name="Textarea",
        class_name="usa-textarea",
        category="forms",
        props=["id", "name", "value", "onChange", "className"],
        a11y=A11yDefaults(role="textbox"),
        description="Multiline text input",
    ),
    "select": CatalogComponent(
        name="select",
        import_name="Dropdown",
        class_name="usa-select",
        category="forms",
        props=["id", "name", "value", "onChange", "className"],
        a11y=A11yDefaults(role="combobox"),
        description="Dropdown select",
    ),
    "checkbox": CatalogComponent(
        name="checkbox",
        import_name="Checkbox",
        class_name="usa-checkbox",
        category="forms",
        props=["id", "name", "checked", "onChange", "label", "className"],
        a11y=A11yDefaults(role="checkbox"),
        description="Checkbox input",
    ),
    "radio": CatalogComponent(
        name="radio",
        import_name="Radio",
        class_name="usa-radio",
        category="forms",
        props=["id", "name", "value", "checked", "onChange", "label", "className"],
        a11y=A11yDefaults(role="radio"),
        description="Radio button input",
    ),
    "label": CatalogComponent(
        name="label",
        import_name="Label",
        class_name="usa-label",
        category="forms",
        props=["htmlFor", "className", "children"],
        description="Form label",
    ),
    "form": CatalogComponent(
        name="form",
        import_name="Form",
        class_name="usa-form",
        category="forms",
        props=["onSubmit", "large", "className"],
        a11y=A11yDefaults(role="form"),
        description="Form container",
    ),
    "card": CatalogComponent(
        name="card",
        import_name="Card",
        class_name="usa-card",
        category="components",
        props=["layout", "headerFirst", "className"],
        variants={
            "default": "usa-card",
            "flag": "usa-card usa-card--flag",
            "headerFirst": "usa-card usa-card--header-first",
        },
        description="Card component",
    ),
    "alert": CatalogComponent(
        name="alert",
        import_name="Alert",
        class_name="usa-alert",
        category="components",
        props=["type", "heading", "slim", "noIcon", "className"],
        variants={
            "info": "usa-alert usa-alert--info",
            "success": "usa-alert usa-alert--success",
            "warning": "usa-alert usa-alert--warning",
            "error": "usa-alert usa-alert--error",
        },
        a11y=A11yDefaults(role="alert"),
        description="Alert message",
    ),
    "modal": CatalogComponent(
        name="modal",
        import_name="Modal",
        class_name="usa-modal",
        category="components",
        props=["isOpen", "onClose", "id", "className"],
        a11y=A11yDefaults(role="dialog"),
        description="Modal dialog",
    ),
    "table": CatalogComponent(
        name="table",
        import_name="Table",
        class_name="usa-table",
        category="components",
        props=["bordered", "fullWidth", "striped", "className"],
        a11y=A11yDefaults(role="table"),
        description="Data table",
    ),
    "accordion": CatalogComponent(
        name="accordion",
        import_name="Accordion",
        class_name="usa-accordion",
        category="components",
        props=["items", "bordered", "multiselectable", "className"],
        description="Accordion component",
    ),
    "banner": CatalogComponent(
        name="banner",
        import_name="Banner",
        class_name="usa-banner",
        category="components",
        props=["flagLanguage", "className"],
        a11y=A11yDefaults(role="banner", aria_label="Official website banner"),
        description="Official site banner",
    ),
    "header": CatalogComponent(
        name="header",
        import_name="Header",
        class_name="usa-header",
        category="navigation",
        props=["basic", "extended", "className"],
        variants={
            "basic": "usa-header usa-header--basic",
            "extended": "usa-header usa-header--extended",
        },
        a11y=A11yDefaults(role="banner"),
        description="Site header",
    ),
    "nav": CatalogComponent(
        name="nav",
        import_name="PrimaryNav",
        class_name="usa-nav",
        category="navigation",
        props=["items", "mobileExpanded", "onToggleMobileNav", "className"],
        a11y=A11yDefaults(role="navigation", aria_label="Primary navigation"),
        description="Primary navigation menu",
    ),
    "sidenav": CatalogComponent(
        name="sidenav",
        import_name="SideNav",
        class_name="usa-sidenav",
        category="navigation",
        props=["items", "className"],
        a11y=A11yDefaults(role="navigation", aria_label="Secondary navigation"),
        description="Side navigation",
    ),
    "breadcrumb": CatalogComponent(
        name="breadcrumb",
        import_name="Breadcrumb",
        class_name="usa-breadcrumb",
        category="navigation",
        props=["className"],
        a11y=A11yDefaults(role="navigation", aria_label="Breadcrumbs"),
        description="Breadcrumb navigation",
    ),
    "footer": CatalogComponent(
        name="footer",
        import_name="Footer",
        class_name="usa-footer",
        category="navigation",
        props=["size", "primary", "secondary", "className"],
        variants={
            "big": "usa-footer usa-footer--big",
            "medium": "usa-footer",
            "slim": "usa-footer usa-footer--slim",
        },
        a11y=A11yDefaults(role="contentinfo"),
        description="Site footer",
    ),
}


def get_component(name: str) -> CatalogComponent | None:
    return _CATALOG.get(name)


def components_by_category(category: str) -> list[CatalogComponent]:
    return [c for c in _CATALOG.values() if c.category == category]


def all_component_names() -> list[str]:
    return list(_CATALOG)
