"""
AUTHGATE Client - Combined Login / Registration Page

One page, two forms. The active tab decides which form is shown; it only
changes on an explicit tab click or on the cross-link in a form's footer.
Each form keeps its own values, errors and processing flag.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

import httpx

from authgate.client.forms import Form, Visit
from authgate.client.routes import RouteTable


class ActiveTab(str, Enum):
    """Which of the two forms is visible."""
    LOGIN = "login"
    REGISTER = "register"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    input_type: str
    autocomplete: Optional[str] = None
    placeholder: Optional[str] = None
    required: bool = True


@dataclass(frozen=True)
class TabCopy:
    """Static text and wiring for one tab."""
    button_label: str
    title: str
    description: str
    head_title: str
    submit_label: str
    submit_route: str
    footer_prompt: str
    footer_label: str
    footer_route: str
    footer_target: ActiveTab
    fields: Tuple[FieldSpec, ...]
    # Registration inputs are locked while submitting; login inputs are not
    lock_fields_while_processing: bool


LOGIN_DEFAULTS = {"email": "", "password": "", "remember": False}
REGISTER_DEFAULTS = {"name": "", "email": "", "password": "", "password_confirmation": ""}

TAB_COPY: Dict[ActiveTab, TabCopy] = {
    ActiveTab.LOGIN: TabCopy(
        button_label="Log in",
        title="Log in to your account",
        description="Enter your email and password below to log in",
        head_title="Log in",
        submit_label="Log in",
        submit_route="login.store",
        footer_prompt="Don't have an account?",
        footer_label="Sign up",
        footer_route="register",
        footer_target=ActiveTab.REGISTER,
        fields=(
            FieldSpec("email", "Email address", "email", "email", "email@example.com"),
            FieldSpec("password", "Password", "password", "current-password", "Password"),
            FieldSpec("remember", "Remember me", "checkbox", required=False),
        ),
        lock_fields_while_processing=False,
    ),
    ActiveTab.REGISTER: TabCopy(
        button_label="Register",
        title="Create an account",
        description="Enter your details below to create your account",
        head_title="Register",
        submit_label="Create account",
        submit_route="register.store",
        footer_prompt="Already have an account?",
        footer_label="Log in",
        footer_route="login",
        footer_target=ActiveTab.LOGIN,
        fields=(
            FieldSpec("name", "Name", "text", "name", "Full name"),
            FieldSpec("email", "Email address", "email", "email", "email@example.com"),
            FieldSpec("password", "Password", "password", "new-password", "Password"),
            FieldSpec(
                "password_confirmation",
                "Confirm password",
                "password",
                "new-password",
                "Confirm password",
            ),
        ),
        lock_fields_while_processing=True,
    ),
}

PASSWORD_FIELDS = {
    ActiveTab.LOGIN: ("password",),
    ActiveTab.REGISTER: ("password", "password_confirmation"),
}

FORGOT_PASSWORD_LABEL = "Forgot password?"


@dataclass
class FieldView:
    name: str
    label: str
    input_type: str
    value: object
    required: bool
    disabled: bool
    error: Optional[str] = None
    autocomplete: Optional[str] = None
    placeholder: Optional[str] = None


@dataclass
class LinkView:
    label: str
    href: str
    tab: Optional[ActiveTab] = None


@dataclass
class TabButtonView:
    tab: ActiveTab
    label: str
    active: bool


@dataclass
class FormView:
    tab: ActiveTab
    fields: List[FieldView]
    submit_label: str
    submit_disabled: bool
    show_spinner: bool
    footer_prompt: str
    footer_link: LinkView
    forgot_password: Optional[LinkView] = None

    def field(self, name: str) -> FieldView:
        for view in self.fields:
            if view.name == name:
                return view
        raise KeyError(name)


@dataclass
class PageView:
    title: str
    description: str
    head_title: str
    tabs: List[TabButtonView]
    form: FormView
    status: Optional[str] = None


class PageRedirect(Exception):
    """The server answered the page request with a redirect."""

    def __init__(self, location: str):
        super().__init__(f"Redirected to {location}")
        self.location = location


class LoginAndRegister:
    """State of the combined login/registration page."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        status: Optional[str] = None,
        can_reset_password: bool = False,
        routes: Optional[RouteTable] = None,
        tab: ActiveTab = ActiveTab.LOGIN,
    ):
        self.status = status
        self.can_reset_password = can_reset_password
        self.routes = routes or RouteTable()
        self.active_tab = ActiveTab(tab)
        self.login_form = Form(LOGIN_DEFAULTS, http)
        self.register_form = Form(REGISTER_DEFAULTS, http)
        # Where the last successful submission sent us
        self.location: Optional[str] = None

    @classmethod
    async def open(
        cls,
        http: httpx.AsyncClient,
        routes: Optional[RouteTable] = None,
        tab: ActiveTab = ActiveTab.LOGIN,
    ) -> "LoginAndRegister":
        """Request the page from the server and build it from its props."""
        routes = routes or RouteTable()
        response = await http.get(
            routes.url(ActiveTab(tab).value),
            headers={"Accept": "application/json"},
            follow_redirects=False,
        )
        if response.is_redirect:
            raise PageRedirect(response.headers["location"])
        response.raise_for_status()

        props = response.json()["props"]
        return cls(
            http,
            status=props.get("status"),
            can_reset_password=bool(props.get("canResetPassword", False)),
            routes=routes,
            tab=ActiveTab(props.get("tab", tab)),
        )

    @property
    def active_form(self) -> Form:
        return self.form_for(self.active_tab)

    def form_for(self, tab: ActiveTab) -> Form:
        if tab is ActiveTab.LOGIN:
            return self.login_form
        return self.register_form

    def select_tab(self, tab) -> None:
        self.active_tab = ActiveTab(tab)

    def click_footer_link(self) -> None:
        self.select_tab(TAB_COPY[self.active_tab].footer_target)

    async def submit_login(self) -> Optional[Visit]:
        return await self._submit(ActiveTab.LOGIN)

    async def submit_register(self) -> Optional[Visit]:
        return await self._submit(ActiveTab.REGISTER)

    async def _submit(self, tab: ActiveTab) -> Optional[Visit]:
        """
        Post one form. Returns None when the submit control is disabled
        (a submission is already in flight) or a required field is blank,
        in which case nothing is sent.
        """
        form = self.form_for(tab)
        copy = TAB_COPY[tab]
        if form.processing or self._missing_required(form, copy):
            return None

        return await form.post(
            self.routes.url(copy.submit_route),
            on_success=self._follow,
            on_finish=lambda: form.reset(*PASSWORD_FIELDS[tab]),
        )

    def _follow(self, visit: Visit) -> None:
        self.location = visit.location

    @staticmethod
    def _missing_required(form: Form, copy: TabCopy) -> bool:
        for spec in copy.fields:
            if not spec.required:
                continue
            value = form.data.get(spec.name)
            if value is None or (isinstance(value, str) and not value.strip()):
                return True
        return False

    def view(self) -> PageView:
        """Everything needed to render the page in its current state."""
        copy = TAB_COPY[self.active_tab]
        form = self.active_form
        locked = form.processing and copy.lock_fields_while_processing

        fields = [
            FieldView(
                name=spec.name,
                label=spec.label,
                input_type=spec.input_type,
                value=form.data[spec.name],
                required=spec.required,
                disabled=locked,
                error=form.errors.get(spec.name),
                autocomplete=spec.autocomplete,
                placeholder=spec.placeholder,
            )
            for spec in copy.fields
        ]

        forgot_password = None
        show_forgot = self.can_reset_password and self.routes.has("password.request")
        if self.active_tab is ActiveTab.LOGIN and show_forgot:
            forgot_password = LinkView(
                label=FORGOT_PASSWORD_LABEL,
                href=self.routes.url("password.request"),
            )

        return PageView(
            title=copy.title,
            description=copy.description,
            head_title=copy.head_title,
            tabs=[
                TabButtonView(tab=tab, label=TAB_COPY[tab].button_label, active=tab is self.active_tab)
                for tab in ActiveTab
            ],
            form=FormView(
                tab=self.active_tab,
                fields=fields,
                submit_label=copy.submit_label,
                submit_disabled=form.processing,
                show_spinner=form.processing,
                footer_prompt=copy.footer_prompt,
                footer_link=LinkView(
                    label=copy.footer_label,
                    href=self.routes.url(copy.footer_route),
                    tab=copy.footer_target,
                ),
                forgot_password=forgot_password,
            ),
            status=self.status,
        )
