LAMBDA_SERVICE_PRINCIPAL = "lambda.amazonaws.com"
EDGE_LAMBDA_SERVICE_PRINCIPAL = "edgelambda.amazonaws.com"
CLOUDFRONT_DISTRIBUTION_TYPE = "AWS::CloudFront::Distribution"
# Replicated functions log into log groups named after the edge region, so the
# names can't be known up front.
EDGE_LOG_ACTIONS = (
    "logs:CreateLogGroup",
    "logs:CreateLogStream",
    "logs:PutLogEvents",
    "logs:DescribeLogStreams",
)
EDGE_LOG_RESOURCE = "arn:aws:logs:*:*:*"
