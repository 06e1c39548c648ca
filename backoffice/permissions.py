from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin


def is_admin_like(user) -> bool:
    # Centralized gatekeeper. Mirrors accounts.User.is_admin_like
    return bool(user.is_authenticated and (user.is_staff or getattr(user, "role", None) in {"admin", "staff"}))


class StaffRequiredMixin(LoginRequiredMixin, UserPassesTestMixin):
    """Anonymous users are sent to login; signed-in non-staff get a 403."""

    def test_func(self):
        return is_admin_like(self.request.user)
