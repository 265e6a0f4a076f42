table_4_0 = {
'0':'Analysis or forecast at a horizontal level or in a horizontal layer at a point in time',
'1':'Individual ensemble forecast, control and perturbed, at a horizontal level or in a horizontal layer at a point in time',
'2-7':'See the WMO Manual on Codes',
'8':'Average, accumulation, extreme values or other statistically processed values at a horizontal level or in a horizontal layer in a continuous or non-continuous time interval',
'9-49151':'See the WMO Manual on Codes',
'49152-65534':'Reserved for Local Use',
'50000':'Analysis or forecast at a horizontal level or in a horizontal layer at a point in time, with the relative time of the source documents (JMA)',
'50008':'Statistically processed values in a time interval, with radar and rain-gauge operation information (JMA)',
'50009':'Statistically processed forecast values in a time interval, with combination ratios of the mesoscale model forecast (JMA)',
'65535':'Missing',
}

table_4_1_0 = {
'0':'Temperature',
'1':'Moisture',
'2':'Momentum',
'3':'Mass',
'4-18':'See the WMO Manual on Codes',
'19':'Physical atmospheric Properties',
'20-191':'Reserved',
'192-254':'Reserved for Local Use',
'255':'Missing',
}

table_4_3 = {
'0':'Analysis',
'1':'Initialization',
'2':'Forecast',
'3':'Bias Corrected Forecast',
'4':'Ensemble Forecast',
'5':'Probability Forecast',
'6':'Forecast Error',
'7':'Analysis Error',
'8':'Observation',
'9':'Climatological',
'10':'Probability-Weighted Forecast',
'11':'Bias-Corrected Ensemble Forecast',
'12-191':'Reserved',
'192-254':'Reserved for Local Use',
'255':'Missing',
}

table_4_4 = {
'0':'Minute',
'1':'Hour',
'2':'Day',
'3':'Month',
'4':'Year',
'5':'Decade (10 Years)',
'6':'Normal (30 Years)',
'7':'Century (100 Years)',
'8-9':'Reserved',
'10':'3 Hours',
'11':'6 Hours',
'12':'12 Hours',
'13':'Second',
'14-191':'Reserved',
'192-254':'Reserved for Local Use',
'255':'Missing',
}

table_4_5 = {
'0':['Reserved','unknown'],
'1':['Ground or Water Surface','unknown'],
'2-100':['See the WMO Manual on Codes','unknown'],
'101':['Mean Sea Level','unknown'],
'102-254':['See the WMO Manual on Codes','unknown'],
'255':['Missing','unknown'],
}

table_4_10 = {
'0':'Average',
'1':'Accumulation',
'2':'Maximum',
'3':'Minimum',
'4':'Difference (value at the end of the time range minus value at the beginning)',
'5':'Root Mean Square',
'6':'Standard Deviation',
'7':'Covariance (temporal variance)',
'8':'Difference ( value at the beginning of the time range minus value at the end)',
'9':'Ratio',
'10':'Standardized Anomaly',
'11':'Summation',
'12-191':'Reserved',
'192-254':'Reserved for Local Use',
'255':'Missing',
}

table_4_11 = {
'0':'Reserved',
'1':'Successive times processed have same forecast time, start time of forecast is incremented.',
'2':'Successive times processed have same start time of forecast, forecast time is incremented.',
'3':'Successive times processed have start time of forecast incremented and forecast time decremented so that valid time remains constant.',
'4':'Successive times processed have start time of forecast decremented and forecast time incremented so that valid time remains constant.',
'5':'Floating subinterval of time between forecast time and end of overall time interval.',
'6-191':'Reserved',
'192-254':'Reserved for Local Use',
'255':'Missing',
}

table_scale_time_hours = {
'0': 1./60.,
'1': 1.,
'2': 24.,
'3': 744.,
'4': 8760.,
'5': 87600.,
'6': 262800.,
'7': 876000.,
'10': 3.,
'11': 6.,
'12': 12.,
'13': 1./3600.,
}
