# SPDX-License-Identifier: Apache-2.0
"""PDF Annotator - place text annotations onto existing PDF pages."""

__version__ = "1.0.0"
