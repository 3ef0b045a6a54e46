# common/tests/test_dump_rows.py

"""
dump_rows COMMAND TESTS

Run with:
    python manage.py test common -v 2
"""

import json
import tempfile
from io import StringIO
from pathlib import Path

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from chat.models import ChatMessage
from users.models import User


class DumpRowsCommandTests(TestCase):
    """
    GUARANTEES:
    - rows of the named model are written as Django JSON fixtures
    - --limit caps the row count, --output writes a file
    - unknown models fail with a CommandError
    """

    def setUp(self):
        user = User.objects.create_user(email="c@example.com", password="pass1234")
        for i in range(3):
            ChatMessage.objects.create(user=user, message=f"m{i}")

    def test_stdout(self):
        out = StringIO()
        call_command("dump_rows", "chat.ChatMessage", "--limit", "2", stdout=out)
        rows = json.loads(out.getvalue())
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[0]["model"], "chat.chatmessage")

    def test_output_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "dump" / "chat.json"
            out = StringIO()
            call_command("dump_rows", "chat.ChatMessage", "--limit", "0", "--output", str(path), stdout=out)

            self.assertEqual(len(json.loads(path.read_text(encoding="utf-8"))), 3)
            self.assertIn("Wrote 3 chat.ChatMessage row(s)", out.getvalue())

    def test_unknown_model(self):
        with self.assertRaises(CommandError):
            call_command("dump_rows", "nope.Nothing")
        with self.assertRaises(CommandError):
            call_command("dump_rows", "justaword")
