"""
Use Cases

Organized into domain folders:
- auth/: Sign-up, sign-in and invite consumption
- users/: Current-user context
- instructors/: Instructor profiles, linking and invites
- courses/: Courses, sessions, attendance and enrollment
- billing/: Subscription plans and processor webhooks

Import from subdirectories.
"""
