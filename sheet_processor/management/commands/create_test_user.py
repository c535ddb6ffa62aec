from django.conf import settings
from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from sheet_processor.api import register_user
from sheet_processor.utils.access_gate import ROLE_USER, ROLE_ADMIN

class Command(BaseCommand):
    help = 'Create a test account that can log in and upload spreadsheets'

    def add_arguments(self, parser):
        parser.add_argument('--email', default='test@example.com')
        parser.add_argument('--password', default='testpassword')
        parser.add_argument('--name', default='Test User')
        parser.add_argument('--role', choices=[ROLE_USER, ROLE_ADMIN], default=ROLE_USER)

    def handle(self, *args, **options):
        if not settings.DEBUG:
            self.stdout.write(self.style.ERROR('This command can only be run in debug mode.'))
            return

        if get_user_model().objects.filter(username=options['email']).exists():
            self.stdout.write(self.style.WARNING(f"User {options['email']} already exists; no test user created."))
            return

        user = register_user(options['name'], options['email'], options['password'], options['role'])
        self.stdout.write(self.style.SUCCESS(f"Successfully created test user {user.email} with role {options['role']}"))
