# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading
import time
import unittest
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

from authprobe.drivers import OktaDriver
from authprobe.errors import ConfigError
from authprobe.http import HttpResponse, StubHttpClient
from authprobe.ratelimit import TokenBucketLimiter
from authprobe.registry import DriverRegistry, register_builtin_drivers
from authprobe.runtime import AuthProbe


class TestDriverRegistry(unittest.TestCase):
    def test_builtin_registration_is_explicit(self):
        registry = DriverRegistry()
        self.assertEqual(registry.names(), [])
        register_builtin_drivers(registry)
        self.assertEqual(registry.names(), ["okta"])
        self.assertIn("okta", registry)

    def test_duplicate_and_unknown_names(self):
        registry = register_builtin_drivers(DriverRegistry())
        with self.assertRaises(ValueError):
            registry.register("okta", OktaDriver.from_options)
        with self.assertRaises(ConfigError):
            registry.get("azure")
        registry.unregister("okta")
        self.assertNotIn("okta", registry)

    def test_create_passes_dependencies(self):
        registry = register_builtin_drivers(DriverRegistry())
        client = StubHttpClient()
        limiter = TokenBucketLimiter()
        driver = registry.create("okta", {"subdomain": "acme"}, http_client=client, limiter=limiter)
        self.assertIsInstance(driver, OktaDriver)
        self.assertIs(driver.http_client, client)
        self.assertIs(driver.limiter, limiter)

    def test_create_propagates_config_errors(self):
        registry = register_builtin_drivers(DriverRegistry())
        with self.assertRaises(ConfigError):
            registry.create("okta", {"domain": "acme"}, http_client=StubHttpClient())

    def test_create_without_dependencies_shares_registry_limiter_and_client(self):
        client = StubHttpClient()
        registry = register_builtin_drivers(DriverRegistry(http_client=client))
        acme = registry.create("okta", {"subdomain": "acme"})
        other = registry.create("okta", {"subdomain": "other"})
        self.assertIs(acme.limiter, other.limiter)
        self.assertIs(acme.limiter, registry.limiter)
        self.assertIs(acme.http_client, client)
        self.assertIs(other.http_client, client)

    def test_drivers_from_registry_defaults_are_throttled_together(self):
        sent = []
        lock = threading.Lock()

        def responder(request):
            with lock:
                sent.append(time.monotonic())
            return HttpResponse(ok=True, status_code=401)

        registry = register_builtin_drivers(
            DriverRegistry(http_client=StubHttpClient(responder=responder), limiter=TokenBucketLimiter())
        )
        drivers = [registry.create("okta", {"subdomain": f"org{i}"}) for i in range(4)]

        start = time.monotonic()
        with ThreadPoolExecutor(max_workers=4) as pool:
            outcomes = list(pool.map(lambda driver: driver.login("alice", "pw"), drivers))

        self.assertTrue(all(not outcome.valid for outcome in outcomes))
        self.assertEqual(len(sent), 4)
        self.assertGreaterEqual(max(sent) - start, 0.9 - 0.02)

    def test_registry_builds_one_default_client_and_closes_it(self):
        built = StubHttpClient()
        with patch("authprobe.registry.create_default_http_client", return_value=built) as factory:
            with register_builtin_drivers(DriverRegistry()) as registry:
                acme = registry.create("okta", {"subdomain": "acme"})
                other = registry.create("okta", {"subdomain": "other"})
                self.assertIs(acme.http_client, built)
                self.assertIs(other.http_client, built)
            factory.assert_called_once_with()
        self.assertTrue(built.closed)

    def test_registry_leaves_injected_client_open(self):
        injected = StubHttpClient()
        registry = register_builtin_drivers(DriverRegistry(http_client=injected))
        registry.create("okta", {"subdomain": "acme"})
        registry.close()
        self.assertFalse(injected.closed)


class TestAuthProbeRuntime(unittest.TestCase):
    def test_drivers_share_client_and_limiter_and_close(self):
        responses = {
            "https://acme.okta.com/api/v1/authn": HttpResponse(ok=True, status_code=401),
            "https://other.okta.com/api/v1/authn": HttpResponse(ok=True, status_code=429),
        }
        client = StubHttpClient(responses)
        limiter = TokenBucketLimiter(interval=0.001, burst=10)

        with AuthProbe(http_client=client, limiter=limiter) as probe:
            acme = probe.driver("okta", {"subdomain": "acme"})
            other = probe.driver("okta", {"subdomain": "other"})
            self.assertIs(acme.limiter, other.limiter)
            self.assertIs(acme.http_client, client)

            self.assertFalse(acme.login("alice", "pw").valid)
            self.assertTrue(other.login("bob", "pw").rate_limited)

        self.assertTrue(client.closed)
        self.assertEqual(len(client.requests), 2)

    def test_default_limiter_uses_settings(self):
        with AuthProbe(http_client=StubHttpClient()) as probe:
            self.assertEqual(probe.limiter.interval, 0.3)
            self.assertEqual(probe.limiter.burst, 1)


if __name__ == "__main__":
    unittest.main()
