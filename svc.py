#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Service manager CLI for docker-compose service groups.

This is the main entry point that delegates to modular components in svc_src/.
"""

from svc_src.commands import main

if __name__ == "__main__":
    main()
