import json
import os
import tempfile
import unittest

from game import (
    Board,
    GameState,
    PersistenceError,
    board_from_json,
    board_to_json,
    json_to_state,
    load_state,
    save_state,
    state_to_json,
)
from kriegsspiel_core.persistence import state_file_exists


def _mid_game_state():
    s = GameState.new(['A', 'B', 'C'], [(3, 3), (4, 2)])
    s.play_space(0, 5)
    s.next_turn()
    s.play_space(0, 5)  # B discovers A's mark
    s.next_turn()
    s.play_space(1, 8)
    s.next_turn()
    s.resign('B')
    return s


class TestJsonCodecs(unittest.TestCase):
    def assertSameState(self, a, b):
        self.assertEqual(a.players, b.players)
        self.assertEqual(a.resigned, b.resigned)
        self.assertEqual(a.current_turn_index, b.current_turn_index)
        self.assertEqual(len(a.boards), len(b.boards))
        for ba, bb in zip(a.boards, b.boards):
            self.assertEqual((ba.width, ba.height), (bb.width, bb.height))
            for sa, sb in zip(ba.grid, bb.grid):
                self.assertEqual(sa.mark, sb.mark)
                self.assertEqual(sa.known_to, sb.known_to)

    def test_given_mid_game_state_when_roundtrip_json_then_every_field_equal(self):
        s = _mid_game_state()
        doc = state_to_json(s)
        self.assertEqual(doc["players"], ['A', 'B', 'C'])
        self.assertEqual(doc["resigned"], ['B'])
        # Survives a trip through actual JSON text too.
        back = json_to_state(json.loads(json.dumps(doc)))
        self.assertSameState(s, back)
        self.assertEqual(back.current_turn_player, s.current_turn_player)
        self.assertEqual(back.boards[0].space_at(1, 1).known_to, {'A', 'B'})

    def test_given_board_when_to_json_then_rows_top_first(self):
        b = Board(width=2, height=2)
        b.space_at(0, 1).mark = 'X'  # bottom-left, code 1
        bj = board_to_json(b)
        self.assertEqual(bj["width"], 2)
        self.assertEqual(bj["spaces"][1][0], {"mark": "X", "knownTo": []})
        self.assertIsNone(bj["spaces"][0][0]["mark"])
        back = board_from_json(bj)
        self.assertEqual(back.space_at(0, 1).mark, 'X')

    def test_given_malformed_documents_when_decoding_then_persistence_error(self):
        good = state_to_json(GameState.new(['X', 'O'], [(3, 3)]))
        missing_players = dict(good)
        del missing_players["players"]
        short_rows = json.loads(json.dumps(good))
        short_rows["boards"][0]["spaces"].pop()
        bad_width = json.loads(json.dumps(good))
        bad_width["boards"][0]["width"] = 0
        not_list = dict(good, boards="nope")
        space_not_object = json.loads(json.dumps(good))
        space_not_object["boards"][0]["spaces"][0][0] = "X"
        board_not_object = dict(good, boards=[[1, 2]])
        for doc in (missing_players, short_rows, bad_width, not_list, space_not_object, board_not_object):
            with self.assertRaises(PersistenceError):
                json_to_state(doc)

    def test_given_out_of_range_turn_index_when_decoding_then_normalized(self):
        doc = state_to_json(GameState.new(['X', 'O'], [(3, 3)]))
        doc["currentTurnIndex"] = 3
        self.assertEqual(json_to_state(doc).current_turn_player, 'O')

    def test_given_bad_player_lists_when_decoding_then_persistence_error(self):
        good = state_to_json(GameState.new(['X', 'O'], [(3, 3)]))
        for players in (['X', 'X', 'OO'], ['X', 'X'], ['X', 'OO'], ['X', '7'], "XO"):
            with self.assertRaises(PersistenceError, msg=repr(players)):
                json_to_state(dict(good, players=players))

    def test_given_single_player_document_when_decoding_then_loaded(self):
        doc = state_to_json(GameState.new(['X', 'O'], [(3, 3)]))
        doc["players"] = ['X']
        s = json_to_state(doc)
        self.assertEqual(s.active_players, ['X'])
        self.assertEqual(s.winner, 'X')


class TestStateFile(unittest.TestCase):
    def test_given_state_when_saved_to_nested_path_then_loaded_back(self):
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "deep", "nest", "game.json")
            self.assertFalse(state_file_exists(path))
            s = _mid_game_state()
            save_state(path, s)
            self.assertTrue(state_file_exists(path))
            back = load_state(path)
            self.assertEqual(state_to_json(back), state_to_json(s))
            # No temp files left next to the target.
            self.assertEqual(os.listdir(os.path.dirname(path)), ["game.json"])

    def test_given_existing_file_when_saved_again_then_replaced(self):
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "game.json")
            s = GameState.new(['X', 'O'], [(3, 3)])
            save_state(path, s)
            s.play_space(0, 5)
            s.next_turn()
            save_state(path, s)
            back = load_state(path)
            self.assertEqual(back.boards[0].space_at(1, 1).mark, 'X')
            self.assertEqual(back.current_turn_player, 'O')

    def test_given_bad_file_contents_when_loading_then_errors(self):
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "game.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{not json")
            with self.assertRaises(PersistenceError):
                load_state(path)
            with open(path, "w", encoding="utf-8") as f:
                f.write("[1, 2]")
            with self.assertRaises(PersistenceError):
                load_state(path)
            with open(path, "wb") as f:
                f.write(b"\xff\xfe{")
            with self.assertRaises(PersistenceError):
                load_state(path)
            with self.assertRaises(FileNotFoundError):
                load_state(os.path.join(td, "missing.json"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
