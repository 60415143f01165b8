import unittest

from game import Board, GameState, render_board, render_code_legend, render_state


class TestRender(unittest.TestCase):
    def test_given_board_when_rendered_for_player_then_only_known_marks_shown(self):
        s = GameState.new(['X', 'O'], [(3, 3)])
        s.play_space(0, 5)
        s.next_turn()
        s.play_space(0, 1)
        b = s.boards[0]
        as_x = render_board(b, 'X')
        as_o = render_board(b, 'O')
        self.assertIn('X', as_x)
        self.assertNotIn('O', as_x)
        self.assertIn('O', as_o)
        self.assertNotIn('X', as_o)
        full = render_board(b, None, title='Board 1')
        self.assertTrue(full.startswith('Board 1\n'))
        self.assertIn('X', full)
        self.assertIn('O', full)

    def test_given_board_when_rendered_then_box_drawing_grid(self):
        txt = render_board(Board(width=3, height=2), 'X')
        lines = txt.split('\n')
        self.assertEqual(len(lines), 5)  # top, row, separator, row, bottom
        self.assertTrue(lines[0].startswith('┌') and lines[0].endswith('┐'))
        self.assertIn('┼', lines[2])
        self.assertTrue(lines[-1].startswith('└'))

    def test_given_wide_board_when_legend_rendered_then_codes_zero_padded(self):
        legend = render_code_legend(Board(width=4, height=3))
        lines = legend.split('\n')
        self.assertIn('09', lines[1])
        self.assertIn('12', lines[1])
        self.assertIn('01', lines[-2])

    def test_given_game_over_when_state_rendered_then_everything_revealed(self):
        s = GameState.new(['X', 'O'], [(3, 3)])
        s.play_space(0, 5)
        s.next_turn()
        hidden = render_state(s, 'O')
        self.assertNotIn('│ X │', hidden)
        self.assertIn("O's turn.", hidden)
        s.resign('X')
        shown = render_state(s, 'O')
        self.assertIn('│ X │', shown)
        self.assertIn('Resigned: X', shown)
        self.assertIn('Game over: O wins!', shown)
        self.assertIn('X: 0  O: 0', shown)


if __name__ == '__main__':
    unittest.main(verbosity=2)
