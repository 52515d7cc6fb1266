# SPDX-License-Identifier: Apache-2.0
"""HTTP boundary for the annotation service.

The application object lives in ``pdf_annotator.api.app``.
"""

from .settings import ServiceSettings, get_settings

__all__ = ["ServiceSettings", "get_settings"]
