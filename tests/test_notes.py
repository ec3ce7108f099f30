"""Tests for note matching and rendering."""

from models import NoteRule, ZoneLevelState
from notes import NOTE_RULES, apply_notes, render_markdown, select_notes

COAST_RULE = NoteRule(zones=("The Coast", "The Ledge"), min_level=0, max_level=20, md_note="## Coast")
PRISON_RULE = NoteRule(zones=("The Ledge",), min_level=5, max_level=30, md_note="## Ledge")


class TestNoteRule:
    def test_matches_inside_range(self):
        assert COAST_RULE.matches("The Coast", 10)

    def test_range_is_inclusive(self):
        assert COAST_RULE.matches("The Coast", 0)
        assert COAST_RULE.matches("The Coast", 20)

    def test_level_above_range(self):
        assert not COAST_RULE.matches("The Coast", 25)

    def test_zone_not_in_set(self):
        assert not COAST_RULE.matches("The Mud Flats", 10)


class TestSelectNotes:
    def test_declaration_order_kept(self):
        rules = [COAST_RULE, PRISON_RULE]
        assert select_notes(rules, "The Ledge", 10) == [COAST_RULE, PRISON_RULE]

    def test_builtin_acts_overlap(self):
        matched = select_notes(NOTE_RULES, "The Cavern of Anger", 15)
        assert matched == NOTE_RULES[:2]


class TestApplyNotes:
    def test_concatenates_and_renders(self):
        state = ZoneLevelState(zone="The Ledge", level=10)
        assert apply_notes(state, [COAST_RULE, PRISON_RULE]) is True
        assert state.html_note.index("<h2>Coast</h2>") < state.html_note.index("<h2>Ledge</h2>")

    def test_no_match_keeps_previous_note(self):
        state = ZoneLevelState(zone="The Coast", level=25, html_note="<p>old</p>")
        assert apply_notes(state, [COAST_RULE]) is False
        assert state.html_note == "<p>old</p>"

    def test_builtin_act_one_note(self):
        state = ZoneLevelState(zone="The Coast", level=10)
        apply_notes(state)
        assert "<h2>Act 1</h2>" in state.html_note
        assert "Act 2" not in state.html_note


class TestRenderMarkdown:
    def test_tables_rendered(self):
        html = render_markdown("| A | B |\n| --- | --- |\n| 1 | 2 |\n")
        assert "<table>" in html
        assert "<td>1</td>" in html

    def test_list_and_bold(self):
        html = render_markdown("- **Logout**\n")
        assert "<li><strong>Logout</strong></li>" in html
