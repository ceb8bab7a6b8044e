# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Application Interface: Narrative Model Port.

Layer:
    application/interfaces
"""

from __future__ import annotations

from typing import Protocol


class NarrativeModelPort(Protocol):
    """A language model that answers a prompt with a JSON document."""

    async def generate_json(self, prompt: str) -> str:
        """Send ``prompt`` once and return the raw text of the reply.

        Raises:
            NarrativeModelUnavailable: Transport failure, timeout or non-2xx.
            NarrativeMalformed: The reply carried no text.
        """
