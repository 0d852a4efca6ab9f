# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest

from fmdata.core.config import ApiKeyAuth, ClientOptions, FileMakerConfig, UserPasswordAuth
from fmdata.core.errors import ConfigurationError


class TestClientOptions(unittest.TestCase):
    """Validation of client construction input."""

    def test_credentials_auth(self):
        opts = ClientOptions.from_input(
            {"server": "https://fm.example.com/", "db": "Contacts", "auth": {"username": "u", "password": "p"}}
        )
        self.assertIsInstance(opts.auth, UserPasswordAuth)
        self.assertEqual(opts.auth.kind, "credentials")
        self.assertEqual(opts.server, "https://fm.example.com")
        self.assertIsNone(opts.layout)

    def test_api_key_auth_camel_case(self):
        opts = ClientOptions.from_input(
            {"server": "https://fm.example.com", "db": "Contacts", "auth": {"apiKey": "KEY_1", "ottoPort": 4000}}
        )
        self.assertIsInstance(opts.auth, ApiKeyAuth)
        self.assertEqual(opts.auth.api_key, "KEY_1")
        self.assertEqual(opts.auth.otto_port, 4000)

    def test_api_key_auth_snake_case(self):
        opts = ClientOptions.from_input(
            {"server": "https://fm.example.com", "db": "Contacts", "auth": {"api_key": "KEY_1"}}
        )
        self.assertEqual(opts.auth.api_key, "KEY_1")
        self.assertIsNone(opts.auth.otto_port)

    def test_server_must_start_with_http(self):
        with self.assertRaises(ConfigurationError) as ctx:
            ClientOptions.from_input({"server": "fm.example.com", "db": "Contacts", "auth": {"apiKey": "k"}})
        self.assertIn("must include http", str(ctx.exception))
        self.assertTrue(ctx.exception.details["errors"])

    def test_db_must_not_be_empty(self):
        with self.assertRaises(ConfigurationError):
            ClientOptions.from_input({"server": "https://fm.example.com", "db": "", "auth": {"apiKey": "k"}})

    def test_empty_credentials_rejected(self):
        with self.assertRaises(ConfigurationError):
            ClientOptions.from_input(
                {"server": "https://fm.example.com", "db": "Contacts", "auth": {"username": "", "password": "p"}}
            )
        with self.assertRaises(ConfigurationError):
            ClientOptions.from_input({"server": "https://fm.example.com", "db": "Contacts", "auth": {"apiKey": ""}})

    def test_mixed_auth_shapes_rejected(self):
        with self.assertRaises(ConfigurationError):
            ClientOptions.from_input(
                {
                    "server": "https://fm.example.com",
                    "db": "Contacts",
                    "auth": {"apiKey": "k", "username": "u", "password": "p"},
                }
            )

    def test_unknown_keys_rejected(self):
        with self.assertRaises(ConfigurationError):
            ClientOptions.from_input(
                {"server": "https://fm.example.com", "db": "Contacts", "auth": {"apiKey": "k"}, "timeout": 5}
            )

    def test_existing_options_pass_through(self):
        opts = ClientOptions.from_input(
            {"server": "https://fm.example.com", "db": "Contacts", "auth": {"apiKey": "k"}, "layout": "Customers"}
        )
        self.assertIs(ClientOptions.from_input(opts), opts)


class TestFileMakerConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = FileMakerConfig.from_env()
        self.assertEqual(cfg.api_version, "vLatest")
        self.assertEqual(cfg.default_otto_port, 3030)
        self.assertIsNone(cfg.http_timeout)
