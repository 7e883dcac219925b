import logging
import math

import pygame

logger = logging.getLogger(__name__)

AXES = ("x", "y", "z")
NUMERIC_CHARS = set("0123456789.-+eE")


class LightPositionInput:
    """
    Three text fields holding the light position.

    Text is kept as typed; ``value`` is the last position whose three
    fields all parsed to finite floats.
    """

    def __init__(self, position=(0.0, 0.0, 0.0)):
        self.fields = {axis: repr(float(v)) for axis, v in zip(AXES, position)}
        self.value = tuple(float(v) for v in position)
        self.active = "x"

    def parse(self):
        """
        Parse all three fields.

        :return: (x, y, z), or None if any field is not a finite number
        """
        try:
            position = tuple(float(self.fields[axis]) for axis in AXES)
        except ValueError:
            return None
        if not all(math.isfinite(v) for v in position):
            return None
        return position

    def set_field(self, axis: str, text: str) -> bool:
        """
        Replace the text of one field.

        :return: True if the light position changed
        """
        if axis not in self.fields:
            raise KeyError(axis)
        self.fields[axis] = text

        position = self.parse()
        if position is None:
            logger.warning("Ignoring light position %s: not a number", self.fields)
            return False
        if position == self.value:
            return False
        self.value = position
        logger.debug("Light position: %s %s %s", *position)
        return True

    def next_field(self) -> None:
        self.active = AXES[(AXES.index(self.active) + 1) % len(AXES)]

    def caption(self) -> str:
        return "  ".join(
            f"{axis}={'[' + text + ']' if axis == self.active else text}"
            for axis, text in self.fields.items()
        )


# =========================
# Event handlers
# =========================


class LightInputHandler:
    def __init__(self, session, light_input: LightPositionInput):
        """
        Edits the light fields from key presses and pushes valid positions.

        :param session: The RenderSession to update
        :param light_input: The text fields being edited
        """
        self.session = session
        self.light_input = light_input

    def on_key(self, event) -> bool:
        """
        :return: True if the session needs a redraw
        """
        fields = self.light_input
        text = fields.fields[fields.active]

        if event.key == pygame.K_TAB:
            fields.next_field()
            return False
        if event.key == pygame.K_BACKSPACE:
            changed = fields.set_field(fields.active, text[:-1])
        elif event.unicode and event.unicode in NUMERIC_CHARS:
            changed = fields.set_field(fields.active, text + event.unicode)
        else:
            return False

        if changed:
            self.session.set_light_position(fields.value)
        return changed


class PointerDragHandler:
    def __init__(self, session, button: int = 1):
        """
        Forwards mouse drags to the session's rotator.

        :param session: The RenderSession whose rotator is dragged
        :param button: Mouse button that starts a drag
        """
        self.session = session
        self.button = button

    def on_event(self, event) -> bool:
        """
        :return: True if the view changed and the session needs a redraw
        """
        rotator = self.session.rotator

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == self.button:
            rotator.begin_drag(*event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == self.button:
            rotator.end_drag()
        elif event.type == pygame.MOUSEMOTION and rotator.dragging:
            return rotator.drag_to(*event.pos)
        return False
