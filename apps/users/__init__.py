"""Users app package.

Defines the staff account model with roles (admin, manager, staff,
therapist) and a current branch. Use ``apps.users.models.CustomUser`` as
the AUTH_USER_MODEL throughout the project.
"""
