import os
import subprocess
import sys
import unittest
from unittest.mock import MagicMock, patch

# Add parent dir to path to import modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.work_state import PingOptions, ProbeStatus
from services.ping_service import PingExecutorError, SystemPingExecutor

LINUX_SUCCESS = """
PING 1.1.1.1 (1.1.1.1) 32(60) bytes of data.
40 bytes from 1.1.1.1: icmp_seq=1 ttl=57 time=11.6 ms

--- 1.1.1.1 ping statistics ---
1 packets transmitted, 1 received, 0% packet loss, time 0ms
rtt min/avg/max/mdev = 11.600/11.600/11.600/0.000 ms
"""

LINUX_TIMEOUT = """
PING 10.255.255.1 (10.255.255.1) 32(60) bytes of data.

--- 10.255.255.1 ping statistics ---
1 packets transmitted, 0 received, 100% packet loss, time 0ms
"""

LINUX_UNREACHABLE = """
PING 10.0.0.99 (10.0.0.99) 32(60) bytes of data.
From 10.0.0.1 icmp_seq=1 Destination Host Unreachable

--- 10.0.0.99 ping statistics ---
1 packets transmitted, 0 received, +1 errors, 100% packet loss, time 0ms
"""

LINUX_TTL = """
PING 8.8.8.8 (8.8.8.8) 32(60) bytes of data.
From 192.168.1.1 icmp_seq=1 Time to live exceeded
"""

LINUX_SMALL_PAYLOAD = """
PING 1.1.1.1 (1.1.1.1) 8(36) bytes of data.
16 bytes from 1.1.1.1: icmp_seq=1 ttl=57

--- 1.1.1.1 ping statistics ---
1 packets transmitted, 1 received, 0% packet loss, time 0ms
"""

WINDOWS_SUB_MS = """
Pinging 127.0.0.1 with 32 bytes of data:
Reply from 127.0.0.1: bytes=32 time<1ms TTL=128
"""

WINDOWS_UNREACHABLE = """
Pinging 10.0.0.99 with 32 bytes of data:
Reply from 10.0.0.1: Destination host unreachable.
"""

WINDOWS_TIMEOUT = """
Pinging 10.255.255.1 with 32 bytes of data:
Request timed out.
"""


class TestParseOutput(unittest.TestCase):
    def test_linux_success_rounds_to_whole_ms(self):
        reply = SystemPingExecutor.parse_output(LINUX_SUCCESS, 0)
        self.assertEqual(reply.status, ProbeStatus.SUCCESS)
        self.assertEqual(reply.roundtrip_ms, 12)

    def test_windows_sub_millisecond_is_zero(self):
        reply = SystemPingExecutor.parse_output(WINDOWS_SUB_MS, 0)
        self.assertEqual(reply.status, ProbeStatus.SUCCESS)
        self.assertEqual(reply.roundtrip_ms, 0)

    def test_small_payload_reply_without_time_uses_elapsed(self):
        reply = SystemPingExecutor.parse_output(LINUX_SMALL_PAYLOAD, 0, elapsed_ms=13.4)
        self.assertEqual(reply.status, ProbeStatus.SUCCESS)
        self.assertEqual(reply.roundtrip_ms, 13)

    def test_small_payload_reply_without_elapsed_is_zero(self):
        reply = SystemPingExecutor.parse_output(LINUX_SMALL_PAYLOAD, 0)
        self.assertTrue(reply.ok)
        self.assertEqual(reply.roundtrip_ms, 0)

    def test_timeouts(self):
        self.assertEqual(SystemPingExecutor.parse_output(LINUX_TIMEOUT, 1).status, ProbeStatus.TIMED_OUT)
        self.assertEqual(SystemPingExecutor.parse_output(WINDOWS_TIMEOUT, 1).status, ProbeStatus.TIMED_OUT)
        self.assertEqual(SystemPingExecutor.parse_output("", 1).status, ProbeStatus.TIMED_OUT)

    def test_unreachable_even_with_zero_exit_code(self):
        self.assertEqual(
            SystemPingExecutor.parse_output(WINDOWS_UNREACHABLE, 0).status,
            ProbeStatus.DESTINATION_UNREACHABLE,
        )
        self.assertEqual(
            SystemPingExecutor.parse_output(LINUX_UNREACHABLE, 1).status,
            ProbeStatus.DESTINATION_UNREACHABLE,
        )

    def test_ttl_expired(self):
        self.assertEqual(SystemPingExecutor.parse_output(LINUX_TTL, 1).status, ProbeStatus.TTL_EXPIRED)

    def test_unknown_host_is_a_fault(self):
        with self.assertRaises(PingExecutorError):
            SystemPingExecutor.parse_output("ping: nosuch.invalid: Name or service not known", 2)
        with self.assertRaises(PingExecutorError):
            SystemPingExecutor.parse_output("Ping request could not find host nosuch.invalid.", 1)

    def test_other_error_is_failure(self):
        self.assertEqual(SystemPingExecutor.parse_output("ping: weird error", 2).status, ProbeStatus.FAILURE)
        self.assertEqual(SystemPingExecutor.parse_output("no numbers here", 0).status, ProbeStatus.FAILURE)


class TestBuildCommand(unittest.TestCase):
    def setUp(self):
        self.executor = SystemPingExecutor()
        self.executor._ping_path = "/bin/ping"
        self.payload = bytes(range(32))

    def test_linux_flags(self):
        with patch.object(sys, "platform", "linux"):
            cmd, encoding, kwargs = self.executor.build_command(
                "1.1.1.1", 4000, self.payload, PingOptions(ttl=32, dont_fragment=True)
            )
        self.assertEqual(cmd[:3], ["/bin/ping", "-c", "1"])
        self.assertEqual(cmd[cmd.index("-W") + 1], "4")
        self.assertEqual(cmd[cmd.index("-t") + 1], "32")
        self.assertEqual(cmd[cmd.index("-s") + 1], "32")
        self.assertEqual(cmd[cmd.index("-M") + 1], "do")
        self.assertEqual(cmd[cmd.index("-p") + 1], self.payload[:16].hex())
        self.assertEqual(cmd[-1], "1.1.1.1")
        self.assertEqual(encoding, "utf-8")
        self.assertEqual(kwargs, {})

    def test_linux_timeout_rounds_up_to_one_second(self):
        with patch.object(sys, "platform", "linux"):
            cmd, _, _ = self.executor.build_command("h", 250, b"", PingOptions())
        self.assertEqual(cmd[cmd.index("-W") + 1], "1")
        self.assertNotIn("-p", cmd)
        self.assertEqual(cmd[cmd.index("-M") + 1], "dont")

    def test_windows_flags(self):
        with patch.object(sys, "platform", "win32"):
            cmd, encoding, kwargs = self.executor.build_command(
                "1.1.1.1", 4000, self.payload, PingOptions(ttl=64, dont_fragment=True)
            )
        self.assertEqual(cmd[cmd.index("-w") + 1], "4000")
        self.assertEqual(cmd[cmd.index("-i") + 1], "64")
        self.assertEqual(cmd[cmd.index("-l") + 1], "32")
        self.assertIn("-f", cmd)
        self.assertEqual(encoding, "oem")
        self.assertIn("creationflags", kwargs)

    def test_darwin_flags(self):
        with patch.object(sys, "platform", "darwin"):
            cmd, _, _ = self.executor.build_command("1.1.1.1", 1500, self.payload, PingOptions(ttl=10, dont_fragment=True))
        self.assertEqual(cmd[cmd.index("-W") + 1], "1500")
        self.assertEqual(cmd[cmd.index("-m") + 1], "10")
        self.assertIn("-D", cmd)

    def test_rejects_option_like_host(self):
        with self.assertRaises(PingExecutorError):
            self.executor.build_command("-oProxyCommand", 1000, b"", PingOptions())

    def test_missing_binary_is_a_fault(self):
        executor = SystemPingExecutor(ping_command="definitely-not-ping")
        with patch("services.ping_service.shutil.which", return_value=None):
            with self.assertRaises(PingExecutorError):
                executor.build_command("1.1.1.1", 1000, b"", PingOptions())


class TestSend(unittest.TestCase):
    def setUp(self):
        self.executor = SystemPingExecutor(grace_seconds=0.5)
        self.executor._ping_path = "/bin/ping"

    def test_success(self):
        proc = MagicMock(stdout=LINUX_SUCCESS, stderr="", returncode=0)
        with patch.object(sys, "platform", "linux"), \
                patch("services.ping_service.subprocess.run", return_value=proc) as mock_run:
            reply = self.executor.send("1.1.1.1", 2000, b"x" * 32, PingOptions())
        self.assertTrue(reply.ok)
        self.assertEqual(reply.roundtrip_ms, 12)
        self.assertAlmostEqual(mock_run.call_args.kwargs["timeout"], 2.5)

    def test_small_payload_measures_process_time(self):
        proc = MagicMock(stdout=LINUX_SMALL_PAYLOAD, stderr="", returncode=0)
        with patch.object(sys, "platform", "linux"), \
                patch("services.ping_service.subprocess.run", return_value=proc), \
                patch("services.ping_service.time.monotonic", side_effect=[100.0, 100.021]):
            reply = self.executor.send("1.1.1.1", 2000, b"x" * 8, PingOptions())
        self.assertEqual(reply.status, ProbeStatus.SUCCESS)
        self.assertEqual(reply.roundtrip_ms, 21)

    def test_subprocess_timeout_is_timed_out(self):
        with patch.object(sys, "platform", "linux"), \
                patch("services.ping_service.subprocess.run",
                      side_effect=subprocess.TimeoutExpired(cmd="ping", timeout=1)):
            reply = self.executor.send("1.1.1.1", 500, b"", PingOptions())
        self.assertEqual(reply.status, ProbeStatus.TIMED_OUT)

    def test_os_error_is_a_fault(self):
        with patch.object(sys, "platform", "linux"), \
                patch("services.ping_service.subprocess.run", side_effect=PermissionError("denied")):
            with self.assertRaises(PingExecutorError):
                self.executor.send("1.1.1.1", 500, b"", PingOptions())


if __name__ == "__main__":
    unittest.main()
