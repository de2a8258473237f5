from devchain import networks
from devchain.config import ConfigSnapshot, load_config_snapshot


def test_defaults_from_empty_mapping():
    cfg = load_config_snapshot({})
    assert cfg.declared_network == "hardhat"
    assert cfg.provider_api_key is None
    assert cfg.signing_key is None
    assert cfg.local_rpc_url == networks.DEFAULT_LOCAL_RPC_URL
    assert cfg.rpc_timeout_sec == 60


def test_values_from_mapping():
    cfg = load_config_snapshot({
        "HARDHAT_NETWORK": "Sepolia",
        "ALCHEMY_API_KEY": "abc123",
        "SEPOLIA_PRIVATE_KEY": "0xdead",
        "ETHERSCAN_API_KEY": "scan",
        "SEPOLIA_RPC_URL": "https://rpc.example/sepolia",
        "RPC_TIMEOUT_SEC": "15",
    })
    assert cfg.declared_network == "sepolia"
    assert cfg.provider_api_key == "abc123"
    assert cfg.signing_key == "0xdead"
    assert cfg.verification_api_key == "scan"
    assert cfg.remote_rpc_url == "https://rpc.example/sepolia"
    assert cfg.rpc_timeout_sec == 15


def test_blank_values_normalize_to_none_and_bad_timeout_falls_back():
    cfg = load_config_snapshot({"ALCHEMY_API_KEY": "   ", "HARDHAT_NETWORK": "", "RPC_TIMEOUT_SEC": "soon"})
    assert cfg.provider_api_key is None
    assert cfg.declared_network == "hardhat"
    assert cfg.rpc_timeout_sec == networks.DEFAULT_RPC_TIMEOUT_SEC


def test_repr_hides_secrets():
    cfg = ConfigSnapshot(provider_api_key="alchemy-secret", signing_key="0xprivate")
    text = repr(cfg)
    assert "alchemy-secret" not in text
    assert "0xprivate" not in text
    assert "hardhat" in text


def test_snapshot_is_immutable_and_with_network_copies():
    cfg = ConfigSnapshot()
    other = cfg.with_network(" LOCALHOST ")
    assert other.declared_network == "localhost"
    assert cfg.declared_network == "hardhat"
    try:
        cfg.declared_network = "sepolia"  # type: ignore[misc]
    except Exception as e:
        assert e.__class__.__name__ == "FrozenInstanceError"
    else:
        raise AssertionError("snapshot must be frozen")


def test_process_env_and_dotenv(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("HARDHAT_NETWORK=sepolia\nALCHEMY_API_KEY=from-dotenv\n", encoding="utf-8")
    monkeypatch.setenv("ALCHEMY_API_KEY", "from-process")
    # load_dotenv writes into os.environ; set-then-delete so monkeypatch restores it afterwards
    monkeypatch.setenv("HARDHAT_NETWORK", "placeholder")
    monkeypatch.delenv("HARDHAT_NETWORK")
    cfg = load_config_snapshot()
    assert cfg.declared_network == "sepolia"
    assert cfg.provider_api_key == "from-process"


def test_process_env_without_dotenv(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("HARDHAT_NETWORK=sepolia\n", encoding="utf-8")
    monkeypatch.setenv("HARDHAT_NETWORK", "localhost")
    monkeypatch.delenv("ALCHEMY_API_KEY", raising=False)
    cfg = load_config_snapshot(use_dotenv=False)
    assert cfg.declared_network == "localhost"
    assert cfg.provider_api_key is None
