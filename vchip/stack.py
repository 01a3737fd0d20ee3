#!/usr/bin/env python3

"""
Stack Emulator

The return stack is not part of system RAM and has no exposed stack pointer,
so a plain list is enough.  It grows on every CALL and shrinks on every RET,
with no fixed depth.  Returning from an empty stack means the program image
is broken, and is reported rather than recovered from.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self):
        self.items = []

    def __len__(self):
        return len(self.items)

    def push(self, item):
        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow") from None

    def get_items(self):
        # For crash reports
        return self.items
