# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""GPIO driver API.

The Fetch interpreter never touches hardware registers:
the "gpio" and "resetpins" commands resolve port, pin, direction and sense
names to driver domain values, then call a GPIO driver:

- FetchGpio: base driver API
- FetchGpioSim: in-memory simulated driver

Unit tests and examples: tests/test_fetchsh_gpio.py
"""


from typing import Dict, Optional, Tuple

import enum
import logging

logger = logging.getLogger(__name__)


class GpioPort(enum.Enum):
    """GPIO ports, valued by their letter."""

    A = "a"
    B = "b"
    C = "c"
    D = "d"
    E = "e"
    F = "f"
    G = "g"
    H = "h"
    I = "i"  # noqa: E741

    @classmethod
    def from_name(cls, name: str) -> "GpioPort":
        """Resolve a port name, e.g. "portd".

        Args:
            name: The port name, case-insensitive.

        Raises:
            ValueError: Not a port name.
        """
        lname = name.lower()
        if not lname.startswith("port"):
            raise ValueError(name)
        return cls(lname[4:])


class GpioDirection(enum.Enum):
    """GPIO pad directions."""

    INPUT = "input"
    OUTPUT = "output"


class GpioSense(enum.Enum):
    """GPIO pad senses (pull resistors or analog mode)."""

    PULLUP = "pullup"
    PULLDOWN = "pulldown"
    FLOATING = "floating"
    ANALOG = "analog"


GPIO_PINS_PER_PORT = 16
"""Number of pins per GPIO port."""


def gpio_pin_from_name(name: str) -> int:
    """Resolve a pin name, e.g. "pin7".

    Args:
        name: The pin name, case-insensitive.

    Returns:
        The pin number.

    Raises:
        ValueError: Not a pin name.
    """
    lname = name.lower()
    if not lname.startswith("pin"):
        raise ValueError(name)
    num = lname[3:]
    # Reject "pin+1", "pin 1", "pin01".
    if not num.isdigit() or (len(num) > 1 and num.startswith("0")):
        raise ValueError(name)
    pin = int(num)
    if pin >= GPIO_PINS_PER_PORT:
        raise ValueError(name)
    return pin


class FetchGpio:
    """Base GPIO driver.

    Concrete drivers implement the pad operations.
    """

    def read(self, port: GpioPort, pin: int) -> int:
        """Read a pad level.

        Args:
            port: The GPIO port.
            pin: The pin number.

        Returns:
            The pad level, 0 or 1.
        """
        raise NotImplementedError()

    def set(self, port: GpioPort, pin: int) -> None:
        """Drive a pad high.

        Args:
            port: The GPIO port.
            pin: The pin number.
        """
        raise NotImplementedError()

    def clear(self, port: GpioPort, pin: int) -> None:
        """Drive a pad low.

        Args:
            port: The GPIO port.
            pin: The pin number.
        """
        raise NotImplementedError()

    def configure(
        self,
        port: GpioPort,
        pin: int,
        direction: GpioDirection,
        sense: GpioSense,
    ) -> None:
        """Configure a pad mode.

        Args:
            port: The GPIO port.
            pin: The pin number.
            direction: Input or output.
            sense: Pull resistors configuration, or analog mode.
        """
        raise NotImplementedError()

    def reset_all(self) -> None:
        """Restore all pads to their default configuration."""
        raise NotImplementedError()


class FetchGpioSim(FetchGpio):
    """Simulated GPIO driver.

    Pads are kept in memory:

    - all pads reset to floating inputs at level 0
    - set() and clear() latch the pad output level
    - reading an output answers its latched level
    - reading an input answers the level driven from outside
      (see drive()), or 1 for an undriven pulled-up input
    """

    class Pad:
        """Simulated pad state."""

        direction: GpioDirection
        sense: GpioSense
        latch: int
        driven: Optional[int]

        def __init__(self) -> None:
            self.direction = GpioDirection.INPUT
            self.sense = GpioSense.FLOATING
            self.latch = 0
            self.driven = None

        @property
        def level(self) -> int:
            """The level a read would answer."""
            if self.direction is GpioDirection.OUTPUT:
                return self.latch
            if self.driven is not None:
                return self.driven
            return 1 if self.sense is GpioSense.PULLUP else 0

        def __repr__(self) -> str:
            return (
                f"{self.direction.value}/{self.sense.value}: "
                f"latch={self.latch}, driven={self.driven}"
            )

    _pads: Dict[Tuple[GpioPort, int], "FetchGpioSim.Pad"]

    def __init__(self) -> None:
        """Initialize driver, all pads are reset."""
        self._pads = {}
        self.reset_all()

    def pad(self, port: GpioPort, pin: int) -> "FetchGpioSim.Pad":
        """Access a simulated pad state.

        Args:
            port: The GPIO port.
            pin: The pin number.

        Raises:
            KeyError: Invalid pin number.
        """
        return self._pads[(port, pin)]

    def drive(self, port: GpioPort, pin: int, level: Optional[int]) -> None:
        """Drive a pad from outside, e.g. a push button.

        Args:
            port: The GPIO port.
            pin: The pin number.
            level: The driven level, None to release the pad.
        """
        self.pad(port, pin).driven = level

    def read(self, port: GpioPort, pin: int) -> int:
        """Overrides FetchGpio.read()."""
        level = self.pad(port, pin).level
        logger.debug("read %s%d: %d", port.name, pin, level)
        return level

    def set(self, port: GpioPort, pin: int) -> None:
        """Overrides FetchGpio.set()."""
        logger.debug("set %s%d", port.name, pin)
        self.pad(port, pin).latch = 1

    def clear(self, port: GpioPort, pin: int) -> None:
        """Overrides FetchGpio.clear()."""
        logger.debug("clear %s%d", port.name, pin)
        self.pad(port, pin).latch = 0

    def configure(
        self,
        port: GpioPort,
        pin: int,
        direction: GpioDirection,
        sense: GpioSense,
    ) -> None:
        """Overrides FetchGpio.configure()."""
        logger.debug(
            "configure %s%d: %s, %s",
            port.name,
            pin,
            direction.value,
            sense.value,
        )
        pad = self.pad(port, pin)
        pad.direction = direction
        pad.sense = sense

    def reset_all(self) -> None:
        """Overrides FetchGpio.reset_all()."""
        logger.debug("reset all pads")
        self._pads = {
            (port, pin): FetchGpioSim.Pad()
            for port in GpioPort
            for pin in range(GPIO_PINS_PER_PORT)
        }
