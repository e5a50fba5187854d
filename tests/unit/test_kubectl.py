"""Unit tests for prodaccess.services.kubectl module."""

from pathlib import Path

from prodaccess.models.results import Outcome
from prodaccess.services.errors import ErrorKind
from prodaccess.services.kubectl import KubectlActivator


def _flag(args, name):
    prefix = f"--{name}="
    return next(a[len(prefix):] for a in args if a.startswith(prefix))


class TestKubectlActivator:

    def test_skips_when_kubectl_missing(self, config, fake_runner, private_tmp, home, client_pair):
        fake_runner.installed.discard("kubectl")
        before = sorted(home.rglob("*"))

        result = KubectlActivator(config, fake_runner).activate(client_pair)

        assert result.outcome is Outcome.SKIPPED
        assert result.ok
        assert fake_runner.calls == []
        assert list(private_tmp.iterdir()) == []
        assert sorted(home.rglob("*")) == before

    def test_sets_embedded_credentials(self, config, fake_runner, private_tmp, client_pair):
        seen = {}

        def on_run(args):
            seen["cert"] = Path(_flag(args, "client-certificate")).read_bytes()
            seen["key"] = Path(_flag(args, "client-key")).read_bytes()

        fake_runner.on_run = on_run

        result = KubectlActivator(config, fake_runner).activate(client_pair)

        assert result.outcome is Outcome.OK
        assert result.warnings == ()
        args = fake_runner.calls[0]
        assert args[:5] == ("kubectl", "config", "set-credentials", "dhtech", "--embed-certs=true")
        assert seen == {"cert": client_pair.cert, "key": client_pair.key}

    def test_ephemeral_files_removed_after_success(self, config, fake_runner, private_tmp, client_pair):
        KubectlActivator(config, fake_runner).activate(client_pair)

        args = fake_runner.calls[0]
        assert not Path(_flag(args, "client-certificate")).exists()
        assert not Path(_flag(args, "client-key")).exists()
        assert list(private_tmp.iterdir()) == []

    def test_failure_reports_tool_error_and_cleans_up(self, config, fake_runner, private_tmp, client_pair):
        fake_runner.results["kubectl"] = (1, "", "error: open /root/.kube/config: permission denied")

        result = KubectlActivator(config, fake_runner).activate(client_pair)

        assert result.outcome is Outcome.FAILED
        assert result.kind is ErrorKind.TOOL_EXECUTION
        assert "permission denied" in result.message
        assert list(private_tmp.iterdir()) == []

    def test_custom_profile(self, config, fake_runner, private_tmp, client_pair):
        config = config.model_copy(update={"kube_profile": "event"})

        KubectlActivator(config, fake_runner).activate(client_pair)

        assert fake_runner.calls[0][3] == "event"

    def test_expired_certificate_is_a_warning(self, config, fake_runner, private_tmp, pair_factory):
        pair = pair_factory(days=-1)

        result = KubectlActivator(config, fake_runner).activate(pair)

        assert result.ok
        assert any("expired" in w for w in result.warnings)

    def test_cleanup_failure_is_a_warning(self, config, fake_runner, undeletable_tmp, client_pair):
        result = KubectlActivator(config, fake_runner).activate(client_pair)

        assert result.outcome is Outcome.OK
        assert sum("Failed to remove ephemeral file" in w for w in result.warnings) == 2

    def test_cleanup_failure_kept_alongside_tool_error(self, config, fake_runner, undeletable_tmp, client_pair):
        fake_runner.results["kubectl"] = (1, "", "error: invalid configuration")

        result = KubectlActivator(config, fake_runner).activate(client_pair)

        assert result.kind is ErrorKind.TOOL_EXECUTION
        assert "invalid configuration" in result.message
        assert any("Failed to remove ephemeral file" in w for w in result.warnings)
