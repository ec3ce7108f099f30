"""
Levelling notes keyed on zone and character level.

Each NoteRule carries a markdown block. Every rule whose zone set contains
the current zone and whose level range contains the current level is
selected; the selected blocks are joined in declaration order and rendered
to HTML for the overlay.
"""

import logging
from typing import Iterable, List, Sequence

import markdown

from models import NoteRule, ZoneLevelState

log = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["tables"]

ACT_1_NOTE = """
## Act 1

| All                    |
| :--------------------- |
| Solo Coast             |
| Group Mud Flats        |
| Solo Hailrake          |
| Solo Submerged passage |

| David | Jacky        | Mark         | Nick    |
| :---- | :----------- | :----------- | :------ |
| XP    | Lower Prison | XP           | XP      |
| Ledge | Prison Trial | Upper Prison | Dweller |

### Chain 1.1

- Swirl Mark => Brutus
- Portal Jacky => Prison trial
- Portal Nick => Dweller
- **Logout**

| David     | Jacky               | Mark    | Nick |
| :-------- | :------------------ | :------ | :--- |
| XP        | Ship Graveyard      | XP      | XP   |
| All Flame | Ship Graveyard Cave | Merveil | XP   |

| All              |
| :--------------- |
| Fairgraves Trick |
"""

ACT_2_NOTE = """
## Act 2

| David         | Jacky        | Mark | Nick                  |
| :------------ | :----------- | :--- | :-------------------- |
| Crossroads WP | Riverways WP | XP   | XP                    |
| Crypt Trial   | Weaver       | Oak  | Chamber of Sins Trial |
| XP            | XP           | XP   | Fidelitas             |

### Chain 2.1

- Swirl Nick => Chamber of Sins trial => Portal to town
- Portal Nick => Baleful Gem
- Portal Jacky => Weaver
- Portal David => Crypt trial
- Portal Mark => Kill Oak
- Run to tree roots

| David       | Jacky | Mark | Nick    |
| :---------- | :---- | :--- | :------ |
| Golden Hand | Alira | Ball | Kraityn |

### Chain 2.2

- Swirl Mark => Ball => run to Northern Forest WP
- Portal Nick => Kill Kraityn
- Portal David => Golden Hand
- Portal Jacky => Help Alira => Run to Thaumatic Emblem
- Someone logout and get to Act 1 => Swirl that person

| Highest Level | Everyone Else |
| :------------ | :------------ |
| Vaal Oversoul | XP            |
"""

ACT_3_NOTE = """
## Act 3

| Highest Level  | Everyone Else |
| :------------- | :------------ |
| Crematorium WP | XP            |

| David             | Jacky  | Mark | Nick          |
| :---------------- | :----- | :--- | :------------ |
| Crematorium Trial | Tolman | XP   | Sewers Portal |

### Chain 3.1

- Swirl Jacky => Click Tolman
- Portal David => Crematorium trial
- Turn in Bracelet, get Thief Tools
- Portal Nick => Sewers

| All         |
| :---------- |
| Solo Sewers |

| Highest Level  | Everyone Else |
| :------------- | :------------ |
| Marketplace WP | XP            |

| David | Jacky           | Mark | Nick            |
| :---- | :-------------- | :--- | :-------------- |
| XP    | Ribbon Spool WP | XP   | Catacombs Trial |
| Docks | Dialla WP       | XP   | XP              |

### Chain 3.2

- Swirl David => Thaumatic Sulfite
- Portal Nick => Catacombs trial
- Swirl Jacky => Take Infernal Talc
- Sewers => Burn Blockage => Get WP

| Highest Level     | Everyone Else                             |
| :---------------- | :---------------------------------------- |
| General Gravicius | Wait for General Gravicius tag then swirl |

| David | Jacky                | Mark | Nick       |
| :---- | :------------------- | :--- | :--------- |
| Piety | Explosive Concoction | XP   | Tower Door |

### Chain 3.3

- Swirl David => Kill Piety
- Portal Nick => Tower door

| Highest Level | Nick          | Everyone Else |
| :------------ | :------------ | :------------ |
| Dominus       | Gardens trial | XP            |

### Chain 3.4

- Swirl &lt;someone&gt; => Dominus
- Aqueduct WP => Garden Trial
"""

NOTE_RULES: List[NoteRule] = [
    NoteRule(
        zones=(
            "The Twilight Strand",
            "Lioneye's Watch",
            "The Coast",
            "The Tidal Island",
            "The Mud Flats",
            "The Submerged Passage",
            "The Flooded Depths",
            "The Ledge",
            "The Climb",
            "The Lower Prison",
            "The Upper Prison",
            "The Wardern's Quarters",
            "Prisoner's Gate",
            "The Ship Graveyard",
            "The Ship Graveyard Cave",
            "The Cavern of Wrath",
            "The Cavern of Anger",
        ),
        min_level=0,
        max_level=20,
        md_note=ACT_1_NOTE,
    ),
    NoteRule(
        zones=(
            "The Cavern of Anger",
            "The Southern Forest",
            "The Forest Encampment",
            "The Old Fields",
            "The Crossroads",
            "Chamber of Sins Level 1",
            "Chamber of Sins Level 2",
            "The Fellshrine Ruins",
            "The Crypt Level 1",
            "The Crypt Level 2",
            "The Broken Bridge",
            "The Riverways",
            "The Wetlands",
            "The Western Forest",
            "The Weaver's Chamber",
            "Vaal Ruins",
            "Northern Forest",
            "The Dread Thicket",
            "The Caverns",
            "Ancient Pyramid",
        ),
        min_level=0,
        max_level=40,
        md_note=ACT_2_NOTE,
    ),
    NoteRule(
        zones=(
            "Ancient Pyramid",
            "The City of Sarn",
            "The Sarn Encampment",
            "The Slums",
            "The Crematorium",
            "The Sewers",
            "The Marketplace",
            "The Catacombs",
            "The Battlefront",
            "Solaris Temple Level 1",
            "Solaris Temple Level 2",
            "The Docks",
            "The Ebony Barracks",
            "Lunaris Temple Level 1",
            "Lunaris Temple Level 2",
            "The Imperial Gardens",
            "The Sceptre of God",
            "The Upper Sceptre of God",
        ),
        min_level=0,
        max_level=45,
        md_note=ACT_3_NOTE,
    ),
]


def render_markdown(text: str) -> str:
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def select_notes(rules: Iterable[NoteRule], zone: str, level: int) -> List[NoteRule]:
    return [rule for rule in rules if rule.matches(zone, level)]


def apply_notes(state: ZoneLevelState, rules: Sequence[NoteRule] = NOTE_RULES) -> bool:
    """
    Re-render the note for the state's current zone and level.

    When nothing matches the previous note is left in place. Returns True
    if a note was rendered.
    """
    matched = select_notes(rules, state.zone, state.level)
    if not matched:
        return False

    full_md = "\n\n".join(rule.md_note for rule in matched)
    state.html_note = render_markdown(full_md)
    log.debug("Rendered %d note(s) for %s (level %d)", len(matched), state.zone, state.level)
    return True
