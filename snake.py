"""
Self-playing snake drawn through pi_curses.

The board and the status line are separate windows; every tick both are
merged and the screen is reconciled once, so only the cells that moved are
sent to the terminal.
"""
import random
import time

from pi_curses import AnsiBackend, InvalidWindowError, ProcessTerminal, Screen, Session, Window

BOARD_WIDTH = 40
BOARD_HEIGHT = 16
# Raw mode swallows Ctrl-C, so the demo ends on its own.
MAX_TICKS = 600

DIRECTIONS = {"up": (-1, 0), "down": (1, 0), "left": (0, -1), "right": (0, 1)}


class SnakeGame:
    def __init__(self, width=BOARD_WIDTH, height=BOARD_HEIGHT):
        self.width = width
        self.height = height
        self.snake = [(height // 2, width // 4 - i) for i in range(3)]
        self.food = self.create_food()
        self.direction = "right"
        self.game_over = False

    def create_food(self):
        while True:
            food = (random.randint(0, self.height - 1), random.randint(0, self.width - 1))
            if food not in self.snake:
                return food

    def blocked(self, cell):
        row, col = cell
        return not (0 <= row < self.height and 0 <= col < self.width) or cell in self.snake[:-1]

    def steer(self):
        """Head for the food, preferring moves that do not hit anything."""
        head_row, head_col = self.snake[0]
        food_row, food_col = self.food
        preferred = []
        if food_row < head_row:
            preferred.append("up")
        elif food_row > head_row:
            preferred.append("down")
        if food_col < head_col:
            preferred.append("left")
        elif food_col > head_col:
            preferred.append("right")
        for name in preferred + list(DIRECTIONS):
            dr, dc = DIRECTIONS[name]
            if not self.blocked((head_row + dr, head_col + dc)):
                self.direction = name
                return

    def move(self):
        """Advance one step. Returns (new_head, vacated_tail_or_None)."""
        dr, dc = DIRECTIONS[self.direction]
        head_row, head_col = self.snake[0]
        new_head = (head_row + dr, head_col + dc)
        if self.blocked(new_head):
            self.game_over = True
            return None, None

        self.snake.insert(0, new_head)
        if new_head == self.food:
            self.food = self.create_food()
            return new_head, None
        return new_head, self.snake.pop()


def draw_border(win):
    win.add_str(0, 0, "+" + "-" * (win.cols - 2) + "+")
    for row in range(1, win.rows - 1):
        win.add_str(row, 0, "|")
        win.add_str(row, win.cols - 1, "|")
    win.add_str(win.rows - 1, 0, "+" + "-" * (win.cols - 2) + "+")


def main():
    terminal = ProcessTerminal()
    screen = Screen(AnsiBackend(terminal), Session.from_terminal(terminal))
    game = SnakeGame()

    board = Window(game.height + 2, game.width + 2, origin=(1, 2), leave_cursor=True)
    status = Window(1, game.width + 2, origin=(game.height + 3, 2))

    terminal.start()
    terminal.hide_cursor()
    try:
        screen.start()
        draw_border(board)
        for row, col in game.snake:
            board.add_str(row + 1, col + 1, "#", attrs="32")
        board.add_str(game.food[0] + 1, game.food[1] + 1, "*", attrs="1;31")

        for _ in range(MAX_TICKS):
            status.add_str(0, 0, f"Length: {len(game.snake):<4} Direction: {game.direction:<6}")
            screen.merge_window(board)
            screen.merge_window(status)
            screen.reconcile()
            time.sleep(0.08)

            game.steer()
            head, tail = game.move()
            if head is None:
                break
            if tail is not None:
                board.add_str(tail[0] + 1, tail[1] + 1, " ")
            board.add_str(head[0] + 1, head[1] + 1, "#", attrs="32")
            board.add_str(game.food[0] + 1, game.food[1] + 1, "*", attrs="1;31")

        status.add_str(0, 0, f"Game Over! Length: {len(game.snake)}".ljust(status.cols))
        screen.refresh_window(status)
        time.sleep(1.5)
    finally:
        screen.stop()
        terminal.stop()


if __name__ == "__main__":
    try:
        main()
    except InvalidWindowError as e:
        print(f"Error: {e}")
        print("Tip: Make sure your terminal window is large enough.")
