# rpsarena

A small rock-paper-scissors arena that runs over TCP on `asyncio`. The
server accepts players, queues those who ask for a match, pairs them two
at a time in arrival order and plays each match until one player has won
two rounds. The client can be played from the terminal, or a crowd of
simulated players can be started at once to exercise the server.

## Installation

```
pip install .
```

No third-party libraries are needed.

## Running the server

```
rpsarena-server
```

Options:

- `--host` (default `127.0.0.1`)
- `--port` (default `4000`)

The server runs until interrupted with Ctrl+C.

## Running clients

```
rpsarena-client
```

Started without options, the client launches 10000 simulated players.
Each one asks for a match again and again, and plays `Rock` or `Paper`
at random each round. Press Ctrl+C to stop them.

To play yourself:

```
rpsarena-client --play NAME
```

Options:

- `--host` (default `127.0.0.1`)
- `--port` (default `4000`)
- `--clients N`: how many simulated players to start (default `10000`)
- `--play NAME`: play interactively under the given name instead

An interactive player is shown a menu (`1. Quit`, `2. Find Match`) and
types a move (`Rock`, `Paper` or `Scissor`, exactly as written) at each
`Play Move` prompt; anything else is asked for again.

## How a session goes

1. The server asks for the player's name.
2. It then asks for an action: quit, or find a match.
3. To find a match, the client listens on a free port of its local
   address and sends that address to the server, which connects to it
   and puts the player in the queue.
4. When two players are waiting, the server sends each the opponent's
   name and then asks both for a move each round. A drawn round scores
   nothing. After every round that does not end the match, both players
   receive the scoreboard as JSON. The first to two round wins takes
   the match, and both receive the final scoreboard.
5. The server closes the match connection and asks the player for an
   action again. If a match fails part way, the server closes that
   player's connection.

## Using it as a library

- `rpsarena.types`: `MoveType`, `MoveResult`, `MatchStatus`,
  `ClientAction`, `ClientStatus`, `Intention`, `MatchInfo`,
  `MatchClientInfo`, `TournamentClient` and `Tournament`. `MatchInfo`
  and `Tournament` encode to compact JSON with `to_json` and decode with
  `from_json`, which raises `ValueError` on bad input.
- `rpsarena.wire`: `receive(reader)` and `send(writer, data)` on asyncio
  streams; `receive` raises `ConnectionError` when the peer has closed.
- `rpsarena.server_match`: `who_wins_move(p1_move, p2_move)` decides a
  round; `handle_match(p1, p2)` plays a match and returns the final
  `MatchInfo`.
- `rpsarena.server_client`: `handle_client(reader, writer, queue)` serves
  one connected player.
- `rpsarena.server`: `client_manager(host, port)` runs the server and
  `match_manager(queue)` pairs queued players.
- `rpsarena.server_tournament`: `create_tournament(reader, writer)` and
  `tournament_manager(queue)`, which keeps the tournaments it is given
  and answers a fetch with a JSON array of them.
- `rpsarena.client`: `run_client(player_name, simulated, host, port)`
  returns the final scoreboards of the matches played;
  `simulate_clients(n, host, port)` runs `n` simulated players at once.
- `rpsarena.client_util` and `rpsarena.client_match`: move parsing,
  scoreboard display and the client side of a match.

```python
from rpsarena.types import MoveType
from rpsarena.server_match import who_wins_move

print(who_wins_move(MoveType.ROCK, MoveType.SCISSOR))
```

## What it does not do

- Match results are not stored anywhere; they last only as long as the
  process that played them.
- The server does not serve tournaments. `tournament_manager` is a
  library function only: no command starts it, and neither command
  creates or fetches tournaments.

## Running the tests

```
pip install .[test]
pytest
```