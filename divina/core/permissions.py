"""
Role checks based on Django groups.

Roles map to the groups created by ``create_user_groups``: Admin, Editor and
Moderator. Superusers and staff that belong to none of these groups are
treated as administrators.
"""
from rest_framework.permissions import BasePermission

ADMIN_GROUP = 'Admin'
EDITOR_GROUP = 'Editor'
MODERATOR_GROUP = 'Moderator'
APPLICATION_GROUPS = [ADMIN_GROUP, EDITOR_GROUP, MODERATOR_GROUP]


def get_user_group_names(user):
    if not user or not user.is_authenticated:
        return []
    return list(user.groups.values_list('name', flat=True))


def is_admin_user(user):
    """
    Check if user is an admin user.
    Returns True if:
    - User is in 'Admin' group, OR
    - User is superuser/staff and not in any application group (fallback)
    """
    user_group_names = get_user_group_names(user)

    if ADMIN_GROUP in user_group_names:
        return True

    has_application_group = any(group in user_group_names for group in APPLICATION_GROUPS)
    if not has_application_group and (user.is_superuser or user.is_staff):
        return True

    return False


def is_editor_user(user):
    """Admins and editors may change published content"""
    return is_admin_user(user) or EDITOR_GROUP in get_user_group_names(user)


def is_moderator_user(user):
    return is_admin_user(user) or MODERATOR_GROUP in get_user_group_names(user)


def get_role_flags(user):
    """Flags consumed by the admin frontend to show or hide sections"""
    is_admin = is_admin_user(user)
    is_editor = is_editor_user(user)
    is_moderator = is_moderator_user(user)
    return {
        'is_admin': is_admin,
        'is_editor': is_editor,
        'is_moderator': is_moderator,
        'can_access_admin': is_admin or is_editor or is_moderator,
        'can_manage_users': is_admin,
        'can_edit_content': is_editor,
        'can_view_audit_logs': is_admin or is_moderator,
    }


class IsAdmin(BasePermission):
    message = 'Only administrators can perform this action'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and is_admin_user(request.user))


class IsContentEditor(BasePermission):
    message = 'Only administrators and editors can manage content'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and is_editor_user(request.user))
