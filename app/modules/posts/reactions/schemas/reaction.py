from pydantic import BaseModel

REACTION_TARGETS = ("post", "comment")
REACTION_TYPES = ("like", "dislike")

class ReactionCreate(BaseModel):
    target: str
    target_id: int
    reaction_type: str
    redirect: str = ""

class ReactionState(BaseModel):
    """The user's opinion on a target after a toggle"""
    target: str
    target_id: int
    state: int  # -1 disliked, 0 neutral, 1 liked
