"""Tests for anchor id generators."""

from crd_doc.anchor_ids import AnchorIdGenerator, RandomAnchorIdGenerator, new_generator


class TestAnchorIdGenerator:
    """Tests for the counter generator."""

    def test_sequence(self):
        gen = AnchorIdGenerator()
        ids = [gen() for _ in range(37)]
        assert ids[:3] == ['f0', 'f1', 'f2']
        assert ids[10] == 'fa'
        assert ids[36] == 'f10'
        assert gen.issued == 37

    def test_independent_instances(self):
        a, b = AnchorIdGenerator(), AnchorIdGenerator()
        a()
        a()
        assert b() == 'f0'


class TestRandomAnchorIdGenerator:
    """Tests for the random generator."""

    def test_regenerates_on_collision(self):
        tokens = iter(['aaaa', 'aaaa', 'aaaa', 'bbbb'])
        gen = RandomAnchorIdGenerator(token_source=lambda: next(tokens))
        assert gen() == 'aaaa'
        assert gen() == 'bbbb'
        assert gen.issued == 2

    def test_default_tokens(self):
        gen = RandomAnchorIdGenerator(length=12)
        token = gen()
        assert len(token) == 12
        assert token.isalnum() and token.lower() == token

    def test_new_generator_styles(self):
        assert isinstance(new_generator('random'), RandomAnchorIdGenerator)
        assert isinstance(new_generator(), AnchorIdGenerator)
