# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Command line interface for recursive-regex.

The entry point is `recursive_regex.cli.__main__:main`.
"""
