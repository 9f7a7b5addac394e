itinerary_prompt = """You are an expert travel planner AI. Create a detailed travel itinerary for a {duration}-day trip to {destination} with a budget of ${budget}. The traveler is interested in {interests} and prefers a {travel_type} style trip.

Please provide the following information in valid JSON format:
1. A daily itinerary with activities, times, and estimated costs
2. Hotel recommendations with names, prices, locations, ratings, and descriptions
3. Must-see attractions with names, estimated costs, suggested durations, and descriptions

Budget breakdown:
- Accommodation: {accommodation_budget:.2f}
- Food: {food_budget:.2f}
- Transportation: {transportation_budget:.2f}
- Activities: {activities_budget:.2f}

Requirements:
- Provide exactly {duration} days of activities
- Each day should have 3-5 activities
- Include a mix of the requested interests
- Ensure activities fit within the allocated budget
- For hotel recommendations, provide 3 options at different price points
- For attractions, list 5-7 must-see places

Format the response as a valid JSON object with the following structure:
{{
  "dailyItinerary": [
    {{
      "day": 1,
      "activities": [
        {{
          "time": "09:00 AM",
          "description": "Visit local museum",
          "cost": 15
        }}
      ]
    }}
  ],
  "hotelRecommendations": [
    {{
      "name": "Grand Hotel",
      "pricePerNight": 120,
      "location": "City Center",
      "rating": 4.5,
      "description": "Luxury hotel with excellent amenities"
    }}
  ],
  "mustSeeAttractions": [
    {{
      "name": "Historic Landmark",
      "estimatedCost": 20,
      "suggestedDuration": "2-3 hours",
      "description": "A must-visit historical site"
    }}
  ]
}}"""
