################################################################################
# File Name: notices.py
# Purpose/Description: User-facing notice presentation
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################
"""
Notice presenter.

The default presenter has no user interface: it writes the notice to the
log and treats it as acknowledged, calling onDismiss immediately.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    """A one-time informational notice."""

    title: str
    message: str


class NoticePresenter:
    """Logs notices and acknowledges them."""

    def __init__(self, autoAcknowledge: bool = True):
        self.autoAcknowledge = autoAcknowledge
        self.shown: list[Notice] = []

    def present(self, notice: Notice, onDismiss: Callable[[], Any] | None = None) -> None:
        """
        Present a notice.

        Args:
            notice: Notice to show
            onDismiss: Called once the user acknowledges the notice
        """
        self.shown.append(notice)
        logger.warning(f"{notice.title} | {notice.message}")

        if self.autoAcknowledge and onDismiss is not None:
            onDismiss()
