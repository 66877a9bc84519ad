# Copyright 2025 The IREE Authors
#
# Licensed under the Apache License v2.0 with LLVM Exceptions.
# See https://llvm.org/LICENSE.txt for license information.
# SPDX-License-Identifier: Apache-2.0 WITH LLVM-exception

"""Exit codes for ci-report."""

SUCCESS = 0
ERROR = 1
NOT_FOUND = 2
SETUP_ERROR = 3
