import logging

import pytest


SCENARIO_A = (
    "1. Attention Capture\nHi this is Sam.\n"
    "2. Discovery\nWhat's your biggest challenge?\n"
    "3. Pitch\nHere's our offer.\n"
    "4. Close\nCan we get started?"
)

SCENARIO_B = (
    "1. Attention Capture\nHi this is Sam.\n"
    "2. Discovery\nWhat's your biggest challenge?\n"
    '- If they say "Not interested" → Rep: "Totally understand, can I ask why?" → Move to Beat 3\n'
    "3. Pitch\nHere's our offer.\n"
    "4. Close\nCan we get started?"
)

MARKDOWN_SCRIPT = """# Cold Call Script

## 1. Attention Capture
**Rep:** Hi {{first_name}}, this is Sam from Acme.

## 2. Discovery
What's your biggest challenge with outbound right now?

BRANCHES
- If they say "We don't do outbound" → Rep: "Totally fair. How do you fill the pipeline today?" → Move to Beat 3
- If they ask "Who is this?" → Rep: "Sam from Acme, we help agencies book meetings."

**3. Pitch**
We place trained SDRs inside your agency.
If they ask about price: Plans start at $2k a month. Move to Beat 4

## Beat 4. Close:
Can we grab 15 minutes on Thursday?

---
CONVERSATION WIN CONDITION
A meeting on the calendar.
"""


@pytest.fixture
def scenario_a() -> str:
    return SCENARIO_A


@pytest.fixture
def scenario_b() -> str:
    return SCENARIO_B


@pytest.fixture
def markdown_script() -> str:
    return MARKDOWN_SCRIPT


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """setup_logging replaces root handlers; put the originals back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
