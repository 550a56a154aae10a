"""
Template-based question generation.

Each topic has a handful of parameterised problem statements. Placeholders
such as ``{samples}`` are filled with random but plausible values, so a
lecturer gets a draft to review rather than a finished question.
"""

import random
import re

QUESTION_TEMPLATES = {
    "monte_carlo": [
        "A manufacturing company wants to estimate the probability of defective products using Monte Carlo simulation. Given a defect rate of {rate}%, simulate {samples} samples and calculate the expected number of defective items out of {total} products.",
        "Use Monte Carlo simulation to estimate the value of pi by generating {samples} random points in a unit square. Explain the methodology and calculate the approximation.",
        "A project has uncertain completion times following a normal distribution with mean {mean} days and standard deviation {std} days. Use Monte Carlo simulation with {samples} iterations to estimate the probability of completing within {target} days.",
        "Simulate a stock price movement using Monte Carlo method with initial price ${price}, annual return {return}%, volatility {volatility}%, over {time_periods} periods. Calculate the expected final price range.",
    ],
    "markov_chain": [
        "A weather system has three states: Sunny, Rainy, Cloudy. The transition matrix is given. If today is sunny, what is the probability of rain in {days} days?",
        "A customer loyalty program has states: New, Regular, Premium, Churned. Given the transition probabilities, calculate the steady-state distribution and interpret the results.",
        "Model a machine's operational states (Working, Maintenance, Broken) as a Markov chain. Given transition probabilities, find the long-run proportion of time in each state.",
        "A brand switching study shows transition probabilities between brands A, B, and C. Calculate the market share equilibrium and time to reach steady state.",
    ],
    "dynamic_programming": [
        "A company has {stages} production stages with costs and capacities. Use dynamic programming to find the optimal production allocation that minimizes total cost while meeting demand of {demand} units.",
        "Solve the knapsack problem with {items} items having weights and values. The knapsack capacity is {capacity}. Find the optimal selection using dynamic programming.",
        "A shortest path problem in a network with {nodes} nodes and given edge weights. Use dynamic programming to find the minimum cost path from source to destination.",
        "An inventory management problem with {time_periods} periods, holding costs, ordering costs, and demand. Use dynamic programming to determine optimal ordering policy.",
    ],
    "project_network_analysis": [
        "A project network has {activities} activities with given durations and dependencies. Calculate the critical path, total project duration, and slack times for each activity.",
        "Perform PERT analysis on a project with optimistic, most likely, and pessimistic time estimates. Calculate expected project duration and probability of completion within {target} days.",
        "A project network requires resource leveling. Given resource constraints and activity durations, determine the optimal schedule to minimize project duration.",
        "Crash analysis for a project network: Given normal and crash durations with associated costs, determine the minimum cost schedule to complete the project in {target} days.",
    ],
    "game_theory": [
        "Two companies compete in pricing strategies. Company A has strategies {strategies_a} and Company B has strategies {strategies_b}. Given the payoff matrix, find the Nash equilibrium.",
        "A zero-sum game between two players with given payoff matrix. Determine the optimal mixed strategies for both players and the value of the game.",
        "Analyze a prisoner's dilemma scenario with specific payoffs. Determine the Nash equilibrium and discuss the efficiency of the outcome.",
        "A sealed-bid auction with {bidders} bidders having private valuations. Analyze the optimal bidding strategies under first-price and second-price auction formats.",
    ],
}

PLACEHOLDER = re.compile(r"\{(\w+)\}")


def random_parameters(rng=random):
    return {
        "rate": rng.randint(1, 20),
        "samples": rng.randint(1000, 9999),
        "total": rng.randint(100, 999),
        "mean": rng.randint(10, 39),
        "std": rng.randint(2, 6),
        "target": rng.randint(20, 39),
        "price": rng.randint(50, 99),
        "return": rng.randint(5, 19),
        "volatility": rng.randint(10, 29),
        "time_periods": rng.randint(1, 12),
        "days": rng.randint(1, 7),
        "stages": rng.randint(3, 7),
        "demand": rng.randint(100, 599),
        "items": rng.randint(5, 19),
        "capacity": rng.randint(50, 149),
        "nodes": rng.randint(4, 11),
        "activities": rng.randint(8, 19),
        "strategies_a": "[A1, A2, A3]",
        "strategies_b": "[B1, B2, B3]",
        "bidders": rng.randint(3, 7),
    }


def fill_template(template, params):
    # Unknown placeholders are left as-is
    return PLACEHOLDER.sub(lambda m: str(params.get(m.group(1), m.group(0))), template)


def generate_question_texts(topic, count, rng=None):
    """Return ``count`` problem statements for ``topic``."""
    rng = rng or random
    templates = QUESTION_TEMPLATES[topic]
    return [fill_template(rng.choice(templates), random_parameters(rng)) for _ in range(count)]
