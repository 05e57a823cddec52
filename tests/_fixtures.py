"""Known vault fixture and sample sources shared by the tests."""

# Encrypts '# development@v6\nALPHA="zeta"'
FIXTURE_CIPHERTEXT = (
    "s7NYXa809k/bVSPwIAmJhPJmEGTtU0hG58hOZy7I0ix6y5HP8LsHBsZCYC/gw5DDFy5DgOcyd18R"
)
FIXTURE_KEY_HEX = "ddcaa26504cd70a6fef9801901c3981538563a1767c297cb8416e8a38c62fe00"
FIXTURE_PLAINTEXT = '# development@v6\nALPHA="zeta"'

FIXTURE_KEY_URI = (
    f"toml-env://:key_{FIXTURE_KEY_HEX}@example.com/vault/.env.vault?environment=development"
)
WRONG_KEY_URI = (
    "toml-env://:key_2c4d267b8c3865f921311612e69273666cc76c008acb577d3e22bc3046fba386"
    "@example.com/vault/.env.vault?environment=development"
)
OTHER_WRONG_KEY_URI = (
    "toml-env://:key_c04959b64473e43dd60c56a536ef8481388528b16759736d89515c25eec69247"
    "@example.com/vault/.env.vault?environment=development"
)

ENV_SOURCE = """BASIC = "basic"
SINGLE_QUOTES = 'single_quotes'
INTEGER = 12345
ENABLED = true
ARRAY = [1, 2, 3, "FOOBAR"]
SINCE = 1979-05-27T07:32:00Z

[TABLE]
KEY = "VALUE"
"""

ENV_LOCAL_SOURCE = """BASIC = "local_basic"
LOCAL = "local"
"""

VAULT_SOURCE = f'VAULT_DEVELOPMENT = "{FIXTURE_CIPHERTEXT}"\n'


