#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

from .cli import main

raise SystemExit(main())
