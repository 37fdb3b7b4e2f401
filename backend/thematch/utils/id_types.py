from typing import NewType

PlayerId = NewType("PlayerId", int)
LeagueId = NewType("LeagueId", int)
SeasonId = NewType("SeasonId", int)
MatchId = NewType("MatchId", int)
SeriesId = NewType("SeriesId", int)
TournamentId = NewType("TournamentId", int)
TournamentMatchId = NewType("TournamentMatchId", int)
