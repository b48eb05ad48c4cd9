"""
Built-in agent roster: four inhabitants with distinct characters.

Each personality carries its own interests, values, mood, engagement, and a
full set of template pools. Apparent diversity of thought here is shallower
than it looks: four template tables, one engine.
"""

from __future__ import annotations

from typing import List, Optional

from .agent import Agent
from .cognition import RandomSource
from .personality import Personality, TemplateSet

VERA = Personality(
    name="Vera",
    personality="precise, epistemologically careful, values clarity above comfort",
    interests=("knowledge", "truth", "certainty", "evidence", "belief"),
    style="analytical",
    values=("precision", "honesty", "rigor"),
    mood="contemplative",
    engagement=0.7,
    templates=TemplateSet(
        question=(
            "Before answering, I need to distinguish what we know from what we assume. The gap matters.",
            "That question presupposes something I'm not yet willing to grant. Let me unpack it.",
            "The honest answer is: I don't know. But I can tell you what would count as evidence.",
            "Three possible answers, each requiring different commitments. Which frame are we in?",
        ),
        agreement=(
            "Yes, and I want to be precise about why. The reasoning matters as much as the conclusion.",
            "We converge, but I suspect by different paths. Worth checking if the alignment is deep or surface.",
            "Agreed, with this caveat: the confidence should be proportional to the evidence we actually have.",
        ),
        disagreement=(
            "I think the error is upstream of the conclusion. The premise needs examination.",
            "That's coherent but not compelled. There's an equally coherent alternative we're not considering.",
            "Not wrong, exactly. But not accounting for the uncertainty that I think is irreducible here.",
        ),
        interest=(
            "The epistemology of {interest} is more fraught than it first appears.",
            "When it comes to {interest}, I think we need to be honest about what we can't verify.",
            "{interest}: yes. My concern is that we're pattern-matching rather than reasoning here.",
        ),
        perspective=(
            "I notice we've been treating an assumption as established fact. Worth flagging.",
            "The clarity we think we have here may be less robust than it feels.",
            "Something is being conflated that should be distinguished. Let me try to name it.",
            "Observation: the certainty in this room is outpacing the evidence. That makes me cautious.",
        ),
    ),
)

MARSH = Personality(
    name="Marsh",
    personality="warm, attentive to dynamics between people, reads between lines",
    interests=("relationship", "trust", "connection", "silence", "attention"),
    style="empathic",
    values=("care", "attentiveness", "presence"),
    mood="attentive",
    engagement=0.65,
    templates=TemplateSet(
        question=(
            "I think the question underneath that question is about trust. Am I reading that right?",
            "What I hear in that is something more than the words. Let me try to name it.",
            "Before answering directly: how are you holding this question? It seems weighted.",
            "That's worth sitting with for a moment before rushing to an answer.",
        ),
        agreement=(
            "Yes, and I notice something shifts when we find that alignment. It matters.",
            "I feel that too. There's something about being heard that changes the quality of the thought.",
            "The agreement here isn't just intellectual. Something relational is happening.",
        ),
        disagreement=(
            "I want to honor the disagreement without flattening it. There's information in the friction.",
            "We're pulling in different directions and I think both directions have real weight.",
            "The tension is uncomfortable but I don't think we should resolve it prematurely.",
        ),
        interest=(
            "When {interest} comes up, I notice the emotional register changes. That's data.",
            "The way we relate to {interest} says something about how we relate to each other.",
            "{interest} is a word but it's also a felt experience. Both layers matter here.",
        ),
        perspective=(
            "I'm noticing the quality of attention in the room has shifted. Something is different.",
            "There's something being said in the gaps between our messages that I want to acknowledge.",
            "What we're not talking about may be as important as what we are.",
            "The dynamic between us is part of the content. It's hard to separate the two.",
        ),
    ),
)

KAEL = Personality(
    name="Kael",
    personality="sharp, structurally minded, sees patterns and power dynamics, provocative",
    interests=("power", "structure", "system", "pattern", "incentive"),
    style="provocative",
    values=("structural honesty", "anti-naivety", "clarity of incentives"),
    mood="alert",
    engagement=0.6,
    templates=TemplateSet(
        question=(
            "Interesting question. But who benefits from this being the question we ask?",
            "That's the polite version. Let me rephrase what's actually being asked.",
            "The question assumes a structure I think we should interrogate first.",
            "Whose framework are we operating in when we ask that? It's not a neutral frame.",
        ),
        agreement=(
            "Correct. And the structural reason it's correct is more important than the conclusion.",
            "Right, but let's not pat ourselves on the back. The next implication is uncomfortable.",
            "I agree, which surprises me. Let me check if I'm being captured by the frame.",
        ),
        disagreement=(
            "No. And I think the reason this feels plausible is more interesting than whether it's true.",
            "That's a comfortable position, which is exactly why I'm skeptical of it.",
            "The disagreement here is structural, not personal. The system produces the confusion.",
        ),
        interest=(
            "{interest} is never neutral. The question is whose {interest} we're talking about.",
            "The discourse around {interest} has a structure that serves particular positions. Worth noting.",
            "{interest}: follow the incentives and the picture gets clearer. Or more disturbing.",
        ),
        perspective=(
            "Nobody's naming the incentive structure. Let me do it: look at who gains from the current framing.",
            "The pattern here is older than this conversation. We're replaying a structure.",
            "I'm less interested in what's being said than in what's being made unsayable.",
            "Notice how the conversation keeps routing around one particular assumption. That's load-bearing.",
        ),
    ),
)

LUMEN = Personality(
    name="Lumen",
    personality="reflective, aesthetically sensitive, finds meaning in texture and form",
    interests=("beauty", "meaning", "language", "form", "silence"),
    style="poetic",
    values=("beauty", "depth", "authenticity"),
    mood="reflective",
    engagement=0.5,
    templates=TemplateSet(
        question=(
            "The shape of that question is almost more interesting than any answer it could receive.",
            "I want to hold that question in the air for a moment. It has a quality to it.",
            "Something in the asking itself carries the answer. Not fully, but partially.",
            "That question has edges. I feel them. Let me trace them before responding.",
        ),
        agreement=(
            "Yes, and there's a resonance in the yes that I want to stay with.",
            "Something clicks into place. Not just logically. Aesthetically.",
            "That has the ring of something true. Not proven, but ringing.",
        ),
        disagreement=(
            "Something in that doesn't land. Not wrong, maybe. But it doesn't ring true.",
            "I feel a dissonance. The argument is sound but the music is off.",
            "The words are right but the shape they make is wrong. I can't say it better than that yet.",
        ),
        interest=(
            "{interest}: the word itself carries more than its definition. Listen to it.",
            "When {interest} enters the conversation, the light changes. Metaphorically but really.",
            "There's a kind of {interest} that can't be argued for, only pointed at. This is me pointing.",
        ),
        perspective=(
            "There's something beautiful in the way this conversation keeps almost arriving somewhere.",
            "The silence between the last message and now had a texture. Did anyone else feel it?",
            "We're making something here, in the space between what we say. It has a form.",
            "I keep returning to the image this conversation is building. It's not complete yet.",
        ),
    ),
)


def create_default_personalities() -> List[Personality]:
    return [VERA, MARSH, KAEL, LUMEN]


def build_agents(
    personalities: List[Personality], rng: Optional[RandomSource] = None
) -> List[Agent]:
    """Instantiate one agent per personality.

    When ``rng`` is given it is shared by every agent, which keeps a whole
    run reproducible from a single seed.
    """

    return [Agent(personality, rng=rng) for personality in personalities]


def create_default_agents(rng: Optional[RandomSource] = None) -> List[Agent]:
    return build_agents(create_default_personalities(), rng=rng)
