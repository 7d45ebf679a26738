"""Unit tests for CommandParser."""

from __future__ import annotations

import unittest

from identity_bot.services.command_parser import Command, CommandParser


class CommandParserTestCase(unittest.TestCase):
    def test_known_commands(self) -> None:
        parser = CommandParser()
        self.assertIs(parser.parse("/get"), Command.GET)
        self.assertIs(parser.parse("  /reset "), Command.RESET)

    def test_plain_text_is_not_a_command(self) -> None:
        parser = CommandParser()
        self.assertIsNone(parser.parse("get"))
        self.assertIsNone(parser.parse("hello there"))
        self.assertIsNone(parser.parse(None))

    def test_unknown_or_wrong_case_command(self) -> None:
        parser = CommandParser()
        self.assertIsNone(parser.parse("/start"))
        self.assertIsNone(parser.parse("/GET"))
        self.assertIsNone(parser.parse("/"))

    def test_arguments_make_command_unrecognized(self) -> None:
        self.assertIsNone(CommandParser().parse("/get now"))

    def test_bot_mention(self) -> None:
        parser = CommandParser(bot_username="@IdentityBot")
        self.assertIs(parser.parse("/get@identitybot"), Command.GET)
        self.assertIsNone(parser.parse("/get@otherbot"))

    def test_any_mention_accepted_without_configured_username(self) -> None:
        self.assertIs(CommandParser().parse("/reset@whatever_bot"), Command.RESET)


if __name__ == "__main__":
    unittest.main()
