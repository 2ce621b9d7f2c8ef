"""
Report Pipelines

Builders for the MongoDB aggregation pipelines behind each report. Each
function returns a fresh list of stages so callers may inspect or extend it
without affecting other requests.
"""

from typing import Any, Dict, List


Pipeline = List[Dict[str, Any]]

# Collection names
FEEDBACK_COLLECTION = 'customerFeedback'
SALES_COLLECTION = 'sales'
AGENT_PERFORMANCE_COLLECTION = 'agentPerformance'
AGENTS_COLLECTION = 'agents'


def feedback_by_product_pipeline() -> Pipeline:
    """
    Group all feedback by product.

    Produces {product, averageRating, feedbackCount, totalRating} rows with
    the average rounded to 2 decimals, highest rated first.
    """
    return [
        {
            '$group': {
                '_id': '$product',
                'averageRating': {'$avg': '$rating'},
                'feedbackCount': {'$sum': 1},
                'totalRating': {'$sum': '$rating'}
            }
        },
        {
            '$project': {
                '_id': 0,
                'product': '$_id',
                'averageRating': {'$round': ['$averageRating', 2]},
                'feedbackCount': 1,
                'totalRating': 1
            }
        },
        {
            '$sort': {'averageRating': -1}
        }
    ]


def channel_rating_by_month_pipeline(month: int) -> Pipeline:
    """
    Average rating per channel for the given month (1-12).

    Stored dates are strings, so they are converted with $toDate before the
    month is extracted. The result collapses to a single document holding
    parallel `channels` and `ratingAvg` arrays.
    """
    return [
        {
            '$addFields': {
                'date': {'$toDate': '$date'}
            }
        },
        {
            '$group': {
                '_id': {
                    'channel': '$channel',
                    'month': {'$month': '$date'}
                },
                'ratingAvg': {'$avg': '$rating'}
            }
        },
        {
            '$match': {'_id.month': month}
        },
        {
            '$group': {
                '_id': '$_id.channel',
                'ratingAvg': {'$push': '$ratingAvg'}
            }
        },
        {
            '$project': {
                '_id': 0,
                'channel': '$_id',
                'ratingAvg': 1
            }
        },
        {
            '$group': {
                '_id': None,
                'channels': {'$push': '$channel'},
                'ratingAvg': {'$push': '$ratingAvg'}
            }
        },
        {
            '$project': {
                '_id': 0,
                'channels': 1,
                'ratingAvg': 1
            }
        }
    ]


def sales_by_region_pipeline(region: str) -> Pipeline:
    """Total sales per salesperson within one region, by salesperson name"""
    return [
        {'$match': {'region': region}},
        {
            '$group': {
                '_id': '$salesperson',
                'totalSales': {'$sum': '$amount'}
            }
        },
        {
            '$project': {
                '_id': 0,
                'salesperson': '$_id',
                'totalSales': 1
            }
        },
        {'$sort': {'salesperson': 1}}
    ]


def agent_performance_pipeline() -> Pipeline:
    """
    Average of every performance metric value per agent, joined with the
    agent's name from the agents collection.
    """
    return [
        {'$unwind': '$performanceMetrics'},
        {
            '$group': {
                '_id': '$agentId',
                'averagePerformance': {'$avg': '$performanceMetrics.value'}
            }
        },
        {
            '$lookup': {
                'from': AGENTS_COLLECTION,
                'localField': '_id',
                'foreignField': 'agentId',
                'as': 'agent'
            }
        },
        {'$unwind': '$agent'},
        {
            '$project': {
                '_id': 0,
                'agentId': '$_id',
                'name': '$agent.name',
                'averagePerformance': {'$round': ['$averagePerformance', 2]}
            }
        },
        {'$sort': {'name': 1}}
    ]
