# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""CI report publisher.

Collects compiler warnings from per-build log artifacts, combines them with a
list of unformatted source files and publishes the result as a GitHub check
run.
"""

__version__ = "0.1.0"
