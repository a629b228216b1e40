"""Strongly typed identifiers for tally domain entities.

Answers, comments and topics are keyed by integers in the store of record;
voters are identified by the opaque profile id string the identity layer
hands us.
"""

from typing import NewType

AnswerId = NewType("AnswerId", int)
CommentId = NewType("CommentId", int)
TopicId = NewType("TopicId", int)
VoterId = NewType("VoterId", str)
