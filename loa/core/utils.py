from loguru import logger


def format_score(score, winning_value):
        if score >= winning_value:
            return "win white"
        if score <= -winning_value:
            return "win black"
        return f"pts {score}"


def print_info(depth, score, nodes, elapsed, move, winning_value):
        move_str = str(move) if move else "-"
        nps = int(nodes / elapsed) if elapsed > 0 else 0
        logger.info(
            f"info depth {depth} score {format_score(score, winning_value)} "
            f"nodes {nodes} nps {nps} time {int(elapsed * 1000)} move {move_str}"
        )
