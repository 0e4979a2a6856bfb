#!/usr/bin/env python3
"""
Unit tests for the latest-wins status mailbox.
"""

import queue
import threading
import unittest
import unittest.mock as mock

from catlink.mailbox import StatusMailbox, StatusStream, publish

from fake_port import wait_for


class TestStatusMailbox(unittest.TestCase):

    def test_offer_until_full(self):
        mailbox = StatusMailbox(2)
        self.assertTrue(mailbox.offer('a'))
        self.assertTrue(mailbox.offer('b'))
        self.assertFalse(mailbox.offer('c'))
        self.assertEqual(mailbox.qsize(), 2)

    def test_get_nowait_on_empty(self):
        with self.assertRaises(queue.Empty):
            StatusMailbox(1).get_nowait()

    def test_get_times_out(self):
        with self.assertRaises(queue.Empty):
            StatusMailbox(1).get(timeout=0.01)

    def test_negative_capacity_rejected(self):
        with self.assertRaises(ValueError):
            StatusMailbox(-1)

    def test_unbuffered_offer_needs_waiting_reader(self):
        mailbox = StatusMailbox(0)
        self.assertFalse(mailbox.offer({'T': '1'}))

        received = []
        reader = threading.Thread(target=lambda: received.append(mailbox.get(timeout=2)))
        reader.start()
        self.assertTrue(wait_for(lambda: mailbox._waiting_readers == 1))
        self.assertTrue(mailbox.offer({'T': '2'}))
        reader.join(timeout=2)
        self.assertEqual(received, [{'T': '2'}])

    def test_stream_is_read_only_view(self):
        mailbox = StatusMailbox(1)
        stream = StatusStream(lambda: mailbox)
        self.assertFalse(hasattr(stream, 'offer'))
        mailbox.offer({'T': '1'})
        self.assertEqual(stream.capacity, 1)
        self.assertEqual(stream.get_nowait(), {'T': '1'})


class TestPublish(unittest.TestCase):

    def setUp(self):
        self.cancel = threading.Event()
        self.log = mock.Mock()

    def test_latest_wins_with_capacity_one(self):
        mailbox = StatusMailbox(1)
        self.assertTrue(publish(mailbox, {'T': 'A'}, self.cancel, self.log))
        self.assertTrue(publish(mailbox, {'T': 'B'}, self.cancel, self.log))
        self.assertEqual(mailbox.get_nowait(), {'T': 'B'})
        with self.assertRaises(queue.Empty):
            mailbox.get_nowait()

    def test_unbuffered_without_reader_drops(self):
        mailbox = StatusMailbox(0)
        self.assertFalse(publish(mailbox, {'T': 'A'}, self.cancel, self.log))
        self.assertFalse(publish(mailbox, {'T': 'B'}, self.cancel, self.log))
        self.assertEqual(self.log.warning.call_count, 2)
        self.assertEqual(mailbox.qsize(), 0)

    def test_eviction_keeps_newest_with_larger_capacity(self):
        mailbox = StatusMailbox(2)
        for value in 'ABC':
            publish(mailbox, {'T': value}, self.cancel, self.log)
        self.assertEqual([mailbox.get_nowait(), mailbox.get_nowait()], [{'T': 'B'}, {'T': 'C'}])

    def test_cancelled_publish_is_abandoned(self):
        mailbox = StatusMailbox(1)
        self.cancel.set()
        self.assertFalse(publish(mailbox, {'T': 'A'}, self.cancel, self.log))
        self.assertEqual(mailbox.qsize(), 0)

    def test_eviction_race_retries_offer(self):
        mailbox = StatusMailbox(1)
        mailbox.offer({'T': 'old'})
        real_offer = mailbox.offer
        calls = []

        def offer(item):
            calls.append(item)
            if len(calls) == 1:
                # A consumer drains the slot between our offer and eviction
                mailbox.get_nowait()
                return False
            return real_offer(item)

        with mock.patch.object(mailbox, 'offer', side_effect=offer):
            self.assertTrue(publish(mailbox, {'T': 'new'}, self.cancel, self.log))
        self.assertEqual(mailbox.get_nowait(), {'T': 'new'})


if __name__ == '__main__':
    unittest.main()
