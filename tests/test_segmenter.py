import pytest

from beatscript.models import ParsedScript, ScriptBranch
from beatscript.segmenter import (
    FOLLOW_THE_FLOW,
    find_beat_headings,
    parse_beat_content,
    parse_script,
)


def test_four_plain_beats_parse_without_branches(scenario_a):
    result = parse_script(scenario_a)

    assert result.is_structured is True
    assert [beat.number for beat in result.beats] == [1, 2, 3, 4]
    assert [beat.title for beat in result.beats] == ["Attention Capture", "Discovery", "Pitch", "Close"]
    assert [beat.say_this for beat in result.beats] == [
        "Hi this is Sam.",
        "What's your biggest challenge?",
        "Here's our offer.",
        "Can we get started?",
    ]
    assert all(beat.branches == [] for beat in result.beats)


def test_rich_branch_is_attached_to_its_beat(scenario_b):
    result = parse_script(scenario_b)

    discovery = result.find_beat(2)
    assert discovery.say_this == "What's your biggest challenge?"
    assert discovery.branches == [
        ScriptBranch(condition="Not interested", response="Totally understand, can I ask why?", target_beat=3)
    ]
    assert result.find_beat(3).branches == []


def test_three_headings_without_beat_four_are_rejected():
    result = parse_script("1. Intro\ntext\n2. Middle\ntext\n3. End\ntext")

    assert result == ParsedScript(beats=[], is_structured=False)


def test_guardrails_prose_is_dropped():
    script = (
        "1. Opener\nHello.\n"
        "2. Objections\nGUARDRAILS\nNever argue with the prospect.\nStay calm.\n"
        "3. Pitch\nOffer.\n"
        "4. Close\nBook it."
    )

    objections = parse_script(script).find_beat(2)

    assert objections.say_this == FOLLOW_THE_FLOW
    assert objections.branches == []


def test_markdown_script(markdown_script):
    result = parse_script(markdown_script)

    assert result.is_structured is True
    assert [(beat.number, beat.title) for beat in result.beats] == [
        (1, "Attention Capture"),
        (2, "Discovery"),
        (3, "Pitch"),
        (4, "Close"),
    ]
    opener, discovery, pitch, close = result.beats
    assert opener.say_this == "Hi {{first_name}}, this is Sam from Acme."
    assert discovery.say_this == "What's your biggest challenge with outbound right now?"
    assert discovery.branches == [
        ScriptBranch("We don't do outbound", "Totally fair. How do you fill the pipeline today?", 3),
        ScriptBranch("Who is this?", "Sam from Acme, we help agencies book meetings.", None),
    ]
    assert pitch.say_this == "We place trained SDRs inside your agency."
    assert pitch.branches == [ScriptBranch("ask about price", "Plans start at $2k a month.", 4)]
    # the last beat stops at the horizontal rule before the win condition
    assert close.say_this == "Can we grab 15 minutes on Thursday?"


def test_last_beat_stops_at_how_to_think_section():
    script = "1. A\nx\n2. B\ny\n3. C\nz\n4. Close\nLet's book it.\n## HOW TO THINK\nStay curious."

    assert parse_script(script).find_beat(4).say_this == "Let's book it."


def test_last_beat_runs_to_end_without_terminator():
    script = "1. A\nx\n2. B\ny\n3. C\nz\n4. Close\nLet's book it.\nTalk soon."

    assert parse_script(script).find_beat(4).say_this == "Let's book it.\nTalk soon."


def test_out_of_range_and_duplicate_numbers_are_ignored_as_beat_starts():
    script = (
        "1. Opener\nHello there.\n"
        "2. Discovery\nTell me about your team.\n"
        "9. Bonus\nNot a beat.\n"
        "3. Pitch\nHere's what we do.\n"
        "2. Discovery again\nRepeated heading.\n"
        "4. Close\nLet's book it.\n"
    )

    result = parse_script(script)

    assert [beat.number for beat in result.beats] == [1, 2, 3, 4]
    assert result.find_beat(2).say_this == "Tell me about your team.\n9. Bonus\nNot a beat."
    # the duplicate heading stays inside beat 3's body
    assert "2. Discovery again" in result.find_beat(3).say_this


def test_beats_keep_encounter_order():
    script = "1. One\na\n3. Three\nc\n2. Two\nb\n4. Four\nd\n"

    assert [beat.number for beat in parse_script(script).beats] == [1, 3, 2, 4]


def test_too_few_accepted_headings_is_unstructured():
    script = "1. Intro\nHello\n4. Close\nBye\n12. Extra\nNope\n"

    result = parse_script(script)

    assert result.is_structured is False
    assert result.beats == []


def test_find_beat_headings_records_body_offsets(scenario_a):
    headings = find_beat_headings(scenario_a)

    assert [heading.number for heading in headings] == [1, 2, 3, 4]
    assert scenario_a[headings[0].body_start:].startswith("Hi this is Sam.")
    assert scenario_a[headings[3].body_start:] == "Can we get started?"


def test_move_only_line_sets_target_of_pending_branch():
    raw = (
        "Ask about their team.\n"
        "IF THEY SAY\n"
        '- If they ask "How much?" → Rep: "Depends on volume."\n'
        "→ Move to Beat 4\n"
        "Some prose that is not a branch.\n"
    )

    say_this, branches = parse_beat_content(raw)

    assert say_this == "Ask about their team."
    assert branches == [ScriptBranch("How much?", "Depends on volume.", 4)]


def test_move_only_line_without_pending_branch_is_dropped():
    assert parse_beat_content("→ Beat 3\nHello.") == ("Hello.", [])


def test_branches_flush_in_order():
    raw = (
        "Pitch line.\n"
        "If they hesitate: Offer a shorter call\n"
        "If they agree: Book the meeting. Move to Beat 4\n"
    )

    say_this, branches = parse_beat_content(raw)

    assert say_this == "Pitch line."
    assert branches == [
        ScriptBranch("hesitate", "Offer a shorter call", None),
        ScriptBranch("agree", "Book the meeting.", 4),
    ]


def test_meta_lines_are_skipped():
    raw = "SAY THIS:\n**Rep:** Great to meet you.\n---\nNote: smile while talking\n"

    assert parse_beat_content(raw) == ("Great to meet you.", [])


def test_empty_beat_uses_placeholder():
    assert parse_beat_content("\n\n   \n") == (FOLLOW_THE_FLOW, [])


def test_parsing_is_repeatable(markdown_script):
    assert parse_script(markdown_script) == parse_script(markdown_script)


@pytest.mark.parametrize(
    "content",
    [
        "",
        None,
        "\x00\xff binary-ish \x1b[31m",
        "#" * 2000 + "\n1. a\n4. b\n",
        "1. \n" * 50,
        "1. x\n4. y\n" + "→ → → Beat Beat 99999999999999999999\n" * 20,
        "\n".join(f"{n}. Beat {n}\n- If they say → → Rep:" for n in range(1, 40)),
    ],
)
def test_never_raises(content):
    result = parse_script(content)

    assert isinstance(result, ParsedScript)
    assert all(1 <= beat.number <= 8 for beat in result.beats)
    assert len({beat.number for beat in result.beats}) == len(result.beats)
    for beat in result.beats:
        for branch in beat.branches:
            assert isinstance(branch.condition, str)
            assert isinstance(branch.response, str)
            assert branch.target_beat is None or branch.target_beat > 0
