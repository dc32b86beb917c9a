from recipe_utils.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings == Settings()
    assert settings.duplicate_distance_threshold == 0.12
    assert settings.distance_metric == "euclidean"
    assert settings.embedding_dimensions == 1536


def test_from_env():
    settings = Settings.from_env(
        {
            "DUPLICATE_DISTANCE_THRESHOLD": "0.2",
            "DISTANCE_METRIC": "Cosine",
            "EMBEDDING_MODEL": "amazon.titan-embed-text-v2:0",
            "VECTOR_DIM": "1024",
            "AWS_REGION": "eu-west-1",
            "RECIPE_DB_PATH": "/tmp/recipes.db",
            "LOG_LEVEL": "debug",
        }
    )
    assert settings.duplicate_distance_threshold == 0.2
    assert settings.distance_metric == "cosine"
    assert settings.embedding_model == "amazon.titan-embed-text-v2:0"
    assert settings.embedding_dimensions == 1024
    assert settings.aws_region == "eu-west-1"
    assert settings.db_path == "/tmp/recipes.db"
    assert settings.log_level == "DEBUG"


def test_invalid_values_keep_defaults(caplog):
    settings = Settings.from_env(
        {
            "DUPLICATE_DISTANCE_THRESHOLD": "close",
            "VECTOR_DIM": "12.5",
            "DISTANCE_METRIC": "manhattan",
        }
    )
    assert settings.duplicate_distance_threshold == 0.12
    assert settings.embedding_dimensions == 1536
    assert settings.distance_metric == "euclidean"
    assert "DISTANCE_METRIC" in caplog.text
