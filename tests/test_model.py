"""
Tests for MarkovModel: configuration, training, generation and persistence.
"""
import json
import random

import pytest

from grimquill import (
    EmptyModelError,
    GenerationRequest,
    MalformedSnapshotError,
    MarkovError,
    MarkovModel,
    ModelSnapshot,
    StopReason,
    TokenType,
    ValidationError,
)


@pytest.fixture
def trained_model(sample_corpus):
    model = MarkovModel(order=2, rng=random.Random(42))
    model.train(sample_corpus)
    return model


def snapshot_document(**overrides):
    document = {
        "order": 1,
        "tokenType": "word",
        "stopTokens": [".", "!", "?"],
        "model": [["a", [["b", 2]]], ["b", [["a", 1], [".", 1]]]],
    }
    document.update(overrides)
    return json.dumps(document)


class TestModelConfiguration:
    """Test suite for model construction."""

    def test_defaults(self):
        """Test default configuration."""
        model = MarkovModel()

        assert model.order == 2
        assert model.token_type == TokenType.WORD
        assert model.stop_tokens == frozenset({".", "!", "?"})
        assert len(model.table) == 0

    def test_custom_configuration(self):
        """Test explicit configuration values are kept."""
        model = MarkovModel(order=4, token_type="char", stop_tokens=["\n"])

        assert model.order == 4
        assert model.token_type == TokenType.CHAR
        assert model.stop_tokens == frozenset({"\n"})

    @pytest.mark.parametrize(
        "options",
        [
            {"order": 0},
            {"order": -3},
            {"token_type": "sentence"},
            {"stop_tokens": ".!?"},
            {"stop_tokens": [""]},
        ],
    )
    def test_invalid_configuration(self, options):
        """Test invalid configuration raises ValidationError."""
        with pytest.raises(ValidationError):
            MarkovModel(**options)

    def test_error_hierarchy(self):
        """Test library errors share a base class."""
        assert issubclass(ValidationError, MarkovError)
        assert issubclass(ValidationError, ValueError)
        assert issubclass(EmptyModelError, MarkovError)
        assert issubclass(MalformedSnapshotError, MarkovError)


class TestModelGeneration:
    """Test suite for training and generating through the model."""

    def test_train_and_generate(self, trained_model):
        """Test a trained model generates text from a seed."""
        text = trained_model.generate(seed="The quick", temperature=0.8, max_length=40)

        assert text.startswith("The quick")
        assert text[-1] in ".!?\""

    def test_generate_without_seed(self, trained_model):
        """Test unseeded generation picks a starting context."""
        result = trained_model.generate_result(max_length=20)

        assert not result.seeded
        assert 2 <= len(result.tokens) <= 20

    def test_generate_with_request(self, trained_model):
        """Test a prepared request can be passed directly."""
        request = GenerationRequest(seed="the lazy dog", max_length=3)

        result = trained_model.generate_result(request)

        assert result.tokens == ["the", "lazy", "dog"]
        assert result.stop_reason == StopReason.MAX_LENGTH

    def test_request_and_options_conflict(self, trained_model):
        """Test mixing a request object with keyword options is rejected."""
        with pytest.raises(TypeError):
            trained_model.generate(GenerationRequest(), seed="The quick")

    def test_unknown_option(self, trained_model):
        """Test unknown generation options raise ValidationError."""
        with pytest.raises(ValidationError):
            trained_model.generate(length=10)

    def test_budget_smaller_than_start(self):
        """Test requests whose budget can't hold the start are rejected."""
        model = MarkovModel(order=3)
        model.train("the quick brown fox jumps over the lazy dog.")

        with pytest.raises(ValidationError):
            model.generate_result(max_length=1)
        with pytest.raises(ValidationError):
            model.generate(seed="the quick brown fox", max_length=3)

    def test_untrained_model(self):
        """Test an untrained model cannot start without a seed."""
        with pytest.raises(EmptyModelError):
            MarkovModel().generate()

    def test_seeded_rng_is_reproducible(self, sample_corpus):
        """Test equal random sources give equal outputs."""
        outputs = []
        for _ in range(2):
            model = MarkovModel(order=2, rng=random.Random(5))
            model.train(sample_corpus)
            outputs.append([model.generate(max_length=25) for _ in range(5)])

        assert outputs[0] == outputs[1]

    def test_train_parallel_matches_train(self, sample_corpus):
        """Test chunked training builds the same table."""
        sequential = MarkovModel(order=2)
        sequential.train(sample_corpus)
        parallel = MarkovModel(order=2, max_workers=2)

        report = parallel.train_parallel(sample_corpus, chunk_size=3)

        assert parallel.table == sequential.table
        assert report.chunks == 3

    def test_merge_records(self):
        """Test worker records merge into the model."""
        model = MarkovModel(order=1)
        model.train("a b")

        model.merge_records([["a", [["b", 1], ["c", 2]]]])

        assert model.table.successors(["a"]) == {"b": 2, "c": 2}

    def test_merge_models(self):
        """Test compatible models merge and incompatible ones don't."""
        left = MarkovModel(order=1)
        left.train("a b")
        right = MarkovModel(order=1)
        right.train("a c")

        left.merge(right)

        assert left.table.successors(["a"]) == {"b": 1, "c": 1}
        with pytest.raises(ValueError):
            left.merge(MarkovModel(order=1, token_type="char"))
        with pytest.raises(ValueError):
            left.merge(MarkovModel(order=2))

    def test_stats(self, trained_model):
        """Test statistics describe the trained table."""
        stats = trained_model.get_stats()

        assert stats.order == 2
        assert stats.unique_contexts == len(trained_model.table)
        assert stats.total_transitions > 0


class TestModelPersistence:
    """Test suite for JSON snapshots."""

    def test_dumps_layout(self, trained_model):
        """Test the serialized document uses the expected keys."""
        document = json.loads(trained_model.dumps())

        assert set(document) == {"order", "tokenType", "stopTokens", "model"}
        assert document["order"] == 2
        assert document["tokenType"] == "word"
        assert document["stopTokens"] == ["!", ".", "?"]

    def test_round_trip(self, trained_model):
        """Test a reloaded model has the same configuration and counts."""
        restored = MarkovModel.loads(trained_model.dumps())

        assert restored.config == trained_model.config
        assert restored.table == trained_model.table

    def test_round_trip_generates_identically(self, trained_model):
        """Test equal random sources give equal output after reloading."""
        first = MarkovModel.loads(trained_model.dumps(), rng=random.Random(9))
        second = MarkovModel.loads(trained_model.dumps(), rng=random.Random(9))

        assert first.generate(max_length=30) == second.generate(max_length=30)

    def test_character_round_trip(self):
        """Test character contexts with spaces survive reloading."""
        model = MarkovModel(order=3, token_type="char")
        model.train(["to be or not to be", "a  b"])

        restored = MarkovModel.loads(model.dumps())

        assert restored.token_type == TokenType.CHAR
        assert restored.table == model.table
        assert ("o", " ", "b") in restored.table

    def test_save_and_load(self, trained_model, tmp_path):
        """Test saving creates parent directories and loading restores the model."""
        path = tmp_path / "models" / "nested" / "model.json"

        trained_model.save(path)
        restored = MarkovModel.load(path)

        assert path.exists()
        assert restored.table == trained_model.table

    def test_load_missing_file(self, tmp_path):
        """Test loading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            MarkovModel.load(tmp_path / "missing.json")

    def test_snapshot_model(self, trained_model):
        """Test snapshots are validated pydantic models."""
        snapshot = trained_model.to_snapshot()

        assert isinstance(snapshot, ModelSnapshot)
        assert MarkovModel.from_snapshot(snapshot).table == trained_model.table

    def test_loads_valid_document(self):
        """Test a hand-written document loads."""
        model = MarkovModel.loads(snapshot_document())

        assert model.table.successors(["b"]) == {"a": 1, ".": 1}

    @pytest.mark.parametrize(
        "document",
        [
            "not json",
            json.dumps({"order": 1, "tokenType": "word", "stopTokens": ["."]}),
            snapshot_document(model=[["a", [["b", 0]]]]),
            snapshot_document(model=[["a", [["b", "3"]]]]),
            snapshot_document(model=[["a", []]]),
            snapshot_document(model=[["a b", [["c", 1]]]]),
            snapshot_document(model=[["a", [["b", 1]]], ["a", [["c", 1]]]]),
            snapshot_document(tokenType="sentence"),
            snapshot_document(order=0),
            snapshot_document(order="1"),
            snapshot_document(stopTokens=[""]),
            snapshot_document(extra=True),
        ],
    )
    def test_malformed_snapshot(self, document):
        """Test malformed documents raise MalformedSnapshotError."""
        with pytest.raises(MalformedSnapshotError):
            MarkovModel.loads(document)
