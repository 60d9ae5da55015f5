"""
Profile Text Analyzer Tests

Tests that analyze_profile():
1. Scores traits, values and ENM approaches by keyword hits
2. Keeps table order for equal confidences and truncates per category
3. Classifies communication style and bio tone by ordered checks
4. Collects green and red flags independently

And that analyze_profile_compatibility():
5. Scores personality match from shared traits and values
6. Detects complementary traits and challenges
7. Builds starters and the explanation in a fixed order

Run with: pytest tests/test_text_analyzer.py -v
"""

from blend_matching.matching.text_analyzer import (
    analyze_profile,
    analyze_profile_compatibility,
    get_profile_text,
)
from blend_matching.matching.vocabulary import GENERIC_CONVERSATION_STARTERS

from factories import make_profile, make_prompt


# ======================================================================
# 1. Profile text
# ======================================================================

class TestProfileText:
    """Verify the text the analyzer reads."""

    def test_joins_bio_and_responses_lowercased(self):
        profile = make_profile(
            bio="Hello There",
            prompt_responses=[
                make_prompt(response_text="First ANSWER"),
                make_prompt(response_text="Second"),
            ],
        )
        assert get_profile_text(profile) == "hello there first answer second"

    def test_prompt_text_is_not_read(self):
        profile = make_profile(prompt_responses=[make_prompt(prompt_text="Hiking", response_text="ok")])
        assert get_profile_text(profile) == "ok"


# ======================================================================
# 2. Keyword scoring
# ======================================================================

class TestKeywordScoring:
    """Verify trait, value and ENM scoring."""

    def test_single_profile_analysis(self):
        profile = make_profile(bio="I love hiking and camping, road trip adventures")
        analysis = analyze_profile(profile)

        assert [(t.name, t.confidence) for t in analysis.personality_traits] == [("adventurous", 1.0)]
        assert [v.name for v in analysis.values] == ["fun"]
        assert analysis.interests == ["hiking"]
        assert analysis.communication_style == "warm"
        assert analysis.bio_tone == "romantic"
        assert analysis.enm_style == []

    def test_confidence_formula(self):
        """Two of eight adventurous keywords: min(2 / 8 × 2, 1) = 0.5."""
        analysis = analyze_profile(make_profile(bio="travel and hiking"))
        assert analysis.personality_traits[0].name == "adventurous"
        assert analysis.personality_traits[0].confidence == 0.5

    def test_equal_confidence_keeps_table_order_and_truncates(self):
        profile = make_profile(bio="travel art read party cozy gym food meditation")
        traits = analyze_profile(profile).personality_traits

        assert len(traits) == 5
        assert [t.name for t in traits] == [
            "adventurous", "creative", "intellectual", "social", "homebody",
        ]
        assert all(t.confidence == 0.25 for t in traits)

    def test_higher_confidence_sorts_first(self):
        profile = make_profile(bio="gym, yoga and sports. I also like to read")
        traits = analyze_profile(profile).personality_traits
        assert [t.name for t in traits] == ["fitness", "intellectual"]

    def test_enm_style(self):
        analysis = analyze_profile(make_profile(bio="Kitchen table style, close with my metamour"))
        assert [s.name for s in analysis.enm_style] == ["kitchen_table"]

    def test_prompt_responses_feed_interests(self):
        profile = make_profile(prompt_responses=[make_prompt(response_text="Yoga at sunrise")])
        assert analyze_profile(profile).interests == ["yoga"]

    def test_empty_profile_has_defaults(self):
        analysis = analyze_profile(make_profile())
        assert analysis.personality_traits == []
        assert analysis.values == []
        assert analysis.enm_style == []
        assert analysis.interests == []
        assert analysis.communication_style == "thoughtful"
        assert analysis.bio_tone == "casual"
        assert analysis.green_flags == []
        assert analysis.red_flags == []


# ======================================================================
# 3. Classification
# ======================================================================

class TestClassification:
    """Verify ordered communication style and bio tone checks."""

    def test_playful_wins_over_warm(self):
        analysis = analyze_profile(make_profile(bio="haha I love a good joke"))
        assert analysis.communication_style == "playful"

    def test_direct_style(self):
        analysis = analyze_profile(make_profile(bio="I am straightforward"))
        assert analysis.communication_style == "direct"

    def test_serious_tone_needs_both_phrases(self):
        assert analyze_profile(make_profile(bio="Looking for something serious")).bio_tone == "serious"
        assert analyze_profile(make_profile(bio="Looking for fun")).bio_tone == "casual"

    def test_professional_tone(self):
        assert analyze_profile(make_profile(bio="Career driven")).bio_tone == "professional"


# ======================================================================
# 4. Flags
# ======================================================================

class TestFlags:
    """Verify independent green and red flag rules."""

    def test_all_green_flags(self):
        bio = "Communication, consent and boundaries matter. Growth through therapy."
        assert analyze_profile(make_profile(bio=bio)).green_flags == [
            "Values communication",
            "Emphasizes consent",
            "Respects boundaries",
            "Growth-oriented",
            "Does personal work",
        ]

    def test_all_red_flags(self):
        bio = "No drama. Couple seeking single woman. No [smokers]"
        assert analyze_profile(make_profile(bio=bio)).red_flags == [
            "Mentions drama",
            "Has many restrictions",
            "Possible unicorn hunting",
        ]

    def test_unicorn_hunter_phrase(self):
        red_flags = analyze_profile(make_profile(bio="not a unicorn hunter")).red_flags
        assert red_flags == ["Possible unicorn hunting"]


# ======================================================================
# 5. Cross-profile analysis
# ======================================================================

class TestProfileCompatibility:
    """Verify analyze_profile_compatibility()."""

    def test_shared_traits_values_and_interests(self):
        bio = "I love hiking and travel. Honest communication matters."
        result = analyze_profile_compatibility(make_profile(bio=bio), make_profile(bio=bio))

        # 50 + 1 shared trait × 10 + 2 shared values × 8
        assert result.personality_match == 76
        assert result.values_alignment == ["communication", "authenticity"]
        assert result.shared_interests == ["hiking", "travel"]
        assert result.potential_challenges == []
        assert result.conversation_starters == [
            "Ask about their favorite hiking experience",
            "Discuss what communication means to them in relationships",
            "They value values communication - explore this",
        ]
        assert result.match_explanation == (
            "You both value communication and authenticity. Shared interests in hiking, travel."
        )

    def test_complementary_traits_and_style_challenge(self):
        user = make_profile(bio="Love to travel and explore")
        candidate = make_profile(bio="Cozy nights at home")
        result = analyze_profile_compatibility(user, candidate)

        assert result.complementary_traits == ["Balance of adventure and stability"]
        assert result.potential_challenges == ["Different communication styles"]
        assert result.match_explanation == "Balance of adventure and stability."

    def test_complementary_is_directional(self):
        user = make_profile(bio="Cozy nights at home")
        candidate = make_profile(bio="Love to travel and explore")
        assert analyze_profile_compatibility(user, candidate).complementary_traits == []

    def test_different_enm_styles(self):
        user = make_profile(bio="kitchen table with my metamour")
        candidate = make_profile(bio="I keep things parallel with privacy")
        result = analyze_profile_compatibility(user, candidate)
        assert result.potential_challenges == ["Different polyamory styles"]

    def test_empty_profiles(self):
        result = analyze_profile_compatibility(make_profile(), make_profile())
        assert result.personality_match == 50
        assert result.conversation_starters == GENERIC_CONVERSATION_STARTERS
        assert result.match_explanation == "Potential for an interesting connection based on your profiles."

    def test_prompt_starter_is_padded(self):
        candidate = make_profile(prompt_responses=[make_prompt(prompt_text="My love language")])
        starters = analyze_profile_compatibility(make_profile(), candidate).conversation_starters
        assert starters == [
            'Ask about their answer to "My love language"',
            GENERIC_CONVERSATION_STARTERS[0],
            GENERIC_CONVERSATION_STARTERS[1],
        ]

    def test_starters_capped_at_four(self):
        bio = "I love hiking. Honest communication matters."
        candidate = make_profile(bio=bio, prompt_responses=[make_prompt(prompt_text="Dealbreakers")])
        starters = analyze_profile_compatibility(make_profile(bio=bio), candidate).conversation_starters
        assert len(starters) == 4
        assert starters[-1] == 'Ask about their answer to "Dealbreakers"'
